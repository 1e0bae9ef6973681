from pydantic_settings import BaseSettings

from windmc.portfolio import Farm, Portfolio
from windmc.simulation import ExperimentConfig, checkpoint_sizes
from windmc.wind import CubicPowerCurve, WeibullParams


class Settings(BaseSettings):
    model_config = {"env_prefix": "WINDMC_", "case_sensitive": False}

    # App
    debug: bool = False
    app_name: str = "WindMC"
    cors_origins: str = "http://localhost:3000"
    log_json: bool = False

    # Farm wind regimes (Weibull)
    farm1_scale: float = 10.0
    farm1_shape: float = 2.0
    farm2_scale: float = 12.0
    farm2_shape: float = 2.2

    # Turbine power curve, shared by both farms
    cut_in: float = 3.0
    rated_speed: float = 12.0
    cut_out: float = 25.0
    rated_power_kw: float = 2000.0

    # Sweep
    checkpoint_step: int = 100
    max_checkpoint: int = 10_000
    reference_sample_size: int = 100_000
    seed: int | None = 42
    reference_method: str = "monte_carlo"

    # Upper bound on scenarios simulated per API request, across all farms
    max_total_scenarios: int = 50_000_000

    def power_curve(self) -> CubicPowerCurve:
        return CubicPowerCurve(
            cut_in=self.cut_in,
            rated_speed=self.rated_speed,
            cut_out=self.cut_out,
            rated_power=self.rated_power_kw,
        )

    def portfolio(self) -> Portfolio:
        curve = self.power_curve()
        return Portfolio(
            farms=(
                Farm("farm1", WeibullParams(self.farm1_scale, self.farm1_shape), curve),
                Farm("farm2", WeibullParams(self.farm2_scale, self.farm2_shape), curve),
            )
        )

    def experiment_config(self) -> ExperimentConfig:
        """Build the default experiment; raises ``ConfigurationError`` if invalid."""
        return ExperimentConfig(
            portfolio=self.portfolio(),
            checkpoints=checkpoint_sizes(self.checkpoint_step, self.max_checkpoint),
            reference_sample_size=self.reference_sample_size,
            seed=self.seed,
            reference_method=self.reference_method,
        )


settings = Settings()
