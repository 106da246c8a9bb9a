"""Letter Boxed solver configuration."""

from dotenv import find_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine the environment file path, or None if not found
ENV_FILE = find_dotenv() or None


class SolverConfig(BaseSettings):
    """Configuration settings for the Letter Boxed solver."""

    max_words: int = 6
    """Maximum number of words in a solution; the search gives up beyond this. Default: 6."""

    min_word_length: int = 3
    """Shortest word allowed in a solution. Default: 3."""

    return_all_solutions: bool = False
    """Whether `find_solutions` returns every minimal solution instead of the best one."""

    parallel_expansion: bool = False
    """Whether to expand large search layers in worker processes. Default: False."""

    max_workers: int | None = None
    """Maximum number of worker processes to use. If None (default), uses os.cpu_count() - 1."""

    parallel_frontier_threshold: int = 20_000
    """Smallest layer (in search states) that is expanded in parallel. Default: 20000."""

    word_list_path: str = "words.txt"
    """Word list file, one word per line."""

    log_dir: str = "logs"
    """Directory for per-puzzle log files written by the command-line runner."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        extra="forbid",
    )


config = SolverConfig()
