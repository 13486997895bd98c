"""Planet configuration loading from TOML files."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from .mesh.icosphere import planet_resolution
from .shape import ShapeSettings


class PlanetConfig(BaseModel):
    """Complete configuration for generating one planet."""

    detail: int = Field(default=3, ge=1, description="User-facing detail level")
    resolution: int | None = Field(
        default=None,
        ge=0,
        description="Explicit subdivision resolution (overrides detail)",
    )
    workers: int | None = Field(
        default=None, ge=1, description="Threads used to build patches"
    )
    shape: ShapeSettings = Field(default_factory=ShapeSettings)

    def subdivision_resolution(self) -> int:
        """Resolution passed to the mesh builder."""
        if self.resolution is not None:
            return self.resolution
        return planet_resolution(self.detail)


CONFIGS_DIR = Path(__file__).resolve().parents[2] / "configs"


def load_config(config_path: Path) -> PlanetConfig:
    """Parse and validate a planet TOML file.

    Raises FileNotFoundError for a missing file, ``tomllib.TOMLDecodeError``
    for malformed TOML and ``pydantic.ValidationError`` for out-of-range
    values.
    """
    return PlanetConfig.model_validate(tomllib.loads(Path(config_path).read_text()))


def _candidates(name: str) -> list[Path]:
    if "/" in name or name.endswith(".toml"):
        return [Path(name)]
    return [CONFIGS_DIR / f"{name}.toml", CONFIGS_DIR / name]


def find_config(name: str) -> Path:
    """Resolve a bundled planet name (``earthlike``) or a TOML path."""
    for candidate in _candidates(name):
        if candidate.is_file():
            return candidate

    raise FileNotFoundError(
        f"No planet config '{name}'; bundled planets: {', '.join(list_configs())}"
    )


def list_configs() -> list[str]:
    """Names of the bundled planet configs."""
    return sorted(p.stem for p in CONFIGS_DIR.glob("*.toml"))
