"""
Cipherly - global configuration as a dataclass.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class SolverConfig:
    """Configuration shared by the CLI commands."""

    # === PATHS ===
    data_dir: Path = Path("data")
    frequencies_file: str = "count_1w.txt"
    frequencies_override: Optional[Path] = None

    # === DICTIONARY ===
    # Two-column word/count table (tab separated)
    frequencies_url: str = "https://norvig.com/ngrams/count_1w.txt"
    first_letter: str = "A"
    last_letter: str = "Z"
    min_frequency: float = 0.0001

    # === SEARCH ===
    max_solution_count: int = 5
    timeout_ms: Optional[float] = 6000.0

    # --- Derived values ---

    @property
    def frequencies_path(self) -> Path:
        """Explicit table if given, else the downloaded one in data_dir."""
        if self.frequencies_override is not None:
            return self.frequencies_override
        return self.data_dir / self.frequencies_file

    def ensure_dirs(self) -> None:
        """Create the directories the commands write into."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    @classmethod
    def from_overrides(cls, **kwargs) -> "SolverConfig":
        """Build a config ignoring None values (for Click integration)."""
        filtered = {k: v for k, v in kwargs.items() if v is not None}
        return cls(**filtered)
