"""
configuration constants for the semantle engine.

all the magic numbers live here so they're easy to tweak.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass
class Config:
    """engine configuration — tweak these as needed."""

    # paths (relative to project root by default)
    data_dir: Path = Path("data")

    # filenames for preprocessed data
    vocab_file: str = "words.json"
    embeddings_file: str = "embeddings_normed.npy"

    # half-width of the match window on the percentage scale.
    # must agree with display_decimals (2 dp -> 0.005)
    tolerance: float = 0.005

    # similarity scores are shown rounded to this many decimals
    display_decimals: int = 2

    # advisor buckets similarities at this many decimals (4 -> x10000)
    advisor_precision: int = 4

    # cells of the candidate similarity matrix held at once (~20 bytes each)
    advisor_block_cells: int = 4_000_000

    # suggested first guess when nothing is known yet (None = always scan)
    bootstrap_word: str | None = "eget"

    # ranks below this are shown as "N/1000", the rest as tepid/cold
    proximity_window: int = 1000
    tepid_threshold: float = 20.0

    # first hint reveals the word just inside the proximity window
    hint_start_rank: int = 1000

    # default length of a neighbor listing
    neighbor_count: int = 10

    # rng seed for picking the secret (None = fresh entropy)
    seed: int | None = None

    # restrict secrets to words at least this common (None = whole vocab)
    min_zipf: float | None = None

    def __post_init__(self):
        """ensure paths are Path objects."""
        self.data_dir = Path(self.data_dir)

    @property
    def vocab_path(self) -> Path:
        return self.data_dir / self.vocab_file

    @property
    def embeddings_path(self) -> Path:
        return self.data_dir / self.embeddings_file


# default config instance
DEFAULT_CONFIG = Config()
