from typing import Literal

from pydantic import BaseModel, Field

from windmc.portfolio import Farm, Portfolio
from windmc.simulation import ConvergenceResult, ExperimentConfig, checkpoint_sizes
from windmc.wind import CubicPowerCurve, WeibullParams
from windmc_api.config import Settings


class WeibullIn(BaseModel):
    scale: float = Field(gt=0, description="Weibull scale parameter (m/s)")
    shape: float = Field(gt=0, description="Weibull shape parameter")


class FarmIn(BaseModel):
    name: str = Field(min_length=1, max_length=64)
    wind: WeibullIn


class PowerCurveIn(BaseModel):
    cut_in: float = Field(gt=0)
    rated_speed: float = Field(gt=0)
    cut_out: float = Field(gt=0)
    rated_power_kw: float = Field(gt=0)


class ConvergenceRequest(BaseModel):
    farms: list[FarmIn] = Field(min_length=1, max_length=10)
    power_curve: PowerCurveIn
    checkpoint_step: int = Field(gt=0)
    max_checkpoint: int = Field(gt=0)
    reference_sample_size: int = Field(gt=0)
    seed: int | None = Field(default=None, ge=0)
    reference_method: Literal["monte_carlo", "quadrature"] = "monte_carlo"

    @classmethod
    def from_settings(cls, s: Settings) -> "ConvergenceRequest":
        return cls(
            farms=[
                FarmIn(name="farm1", wind=WeibullIn(scale=s.farm1_scale, shape=s.farm1_shape)),
                FarmIn(name="farm2", wind=WeibullIn(scale=s.farm2_scale, shape=s.farm2_shape)),
            ],
            power_curve=PowerCurveIn(
                cut_in=s.cut_in,
                rated_speed=s.rated_speed,
                cut_out=s.cut_out,
                rated_power_kw=s.rated_power_kw,
            ),
            checkpoint_step=s.checkpoint_step,
            max_checkpoint=s.max_checkpoint,
            reference_sample_size=s.reference_sample_size,
            seed=s.seed,
            reference_method=s.reference_method,
        )

    def total_scenarios(self) -> int:
        """Scenarios simulated per farm across the sweep and reference run."""
        n_steps = self.max_checkpoint // self.checkpoint_step
        sweep = self.checkpoint_step * n_steps * (n_steps + 1) // 2
        reference = self.reference_sample_size if self.reference_method == "monte_carlo" else 0
        return (sweep + reference) * len(self.farms)

    def to_experiment_config(self) -> ExperimentConfig:
        """Build the engine configuration; raises ``ConfigurationError``."""
        pc = self.power_curve
        curve = CubicPowerCurve(
            cut_in=pc.cut_in,
            rated_speed=pc.rated_speed,
            cut_out=pc.cut_out,
            rated_power=pc.rated_power_kw,
        )
        portfolio = Portfolio(
            farms=tuple(
                Farm(f.name, WeibullParams(f.wind.scale, f.wind.shape), curve) for f in self.farms
            )
        )
        return ExperimentConfig(
            portfolio=portfolio,
            checkpoints=checkpoint_sizes(self.checkpoint_step, self.max_checkpoint),
            reference_sample_size=self.reference_sample_size,
            seed=self.seed,
            reference_method=self.reference_method,
        )


class ConvergencePointOut(BaseModel):
    sample_size: int
    mean: float
    empirical_se: float
    theoretical_se: float
    ci_lower: float
    ci_upper: float


class ReferenceOut(BaseModel):
    mean: float
    variance: float
    sample_size: int
    method: str
    standard_error: float


class ConvergenceSummary(BaseModel):
    final_sample_size: int
    final_estimate: float
    reference_value: float
    reference_method: str
    absolute_error: float
    relative_error_pct: float | None
    theoretical_se: float
    empirical_se: float
    decay_slope: float | None


class ConvergenceResponse(BaseModel):
    points: list[ConvergencePointOut]
    reference: ReferenceOut
    summary: ConvergenceSummary

    @classmethod
    def from_result(cls, result: ConvergenceResult) -> "ConvergenceResponse":
        points = []
        for p in result.points:
            lower, upper = p.confidence_interval()
            points.append(
                ConvergencePointOut(
                    sample_size=p.sample_size,
                    mean=p.mean,
                    empirical_se=p.empirical_se,
                    theoretical_se=p.theoretical_se,
                    ci_lower=lower,
                    ci_upper=upper,
                )
            )
        ref = result.reference
        return cls(
            points=points,
            reference=ReferenceOut(
                mean=ref.mean,
                variance=ref.variance,
                sample_size=ref.sample_size,
                method=ref.method,
                standard_error=ref.standard_error,
            ),
            summary=ConvergenceSummary(**result.summary()),
        )
