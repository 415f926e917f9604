from dataclasses import dataclass
from typing import Optional


@dataclass
class FrameDataConfig:
    # Source data
    data_dir: Optional[str] = None
    characters_sheet: str = "Characters"
    macros_sheet: str = "Macros"
    macro_prefix: str = "MACRO_"

    # Query handling
    max_query_length: int = 100

    # Fuzzy matching
    enable_fuzzy_matching: bool = True
    fuzzy_threshold: float = 0.6
    fuzzy_scorer: str = "WRatio"

    # Startup
    load_on_start: bool = True
