from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    pass


DEFAULT_API_URL = "http://localhost:3000/api/v1"


@dataclass(frozen=True)
class AppSettings:
    base_url: str
    timeout_seconds: int
    query_retry_attempts: int
    query_stale_seconds: int
    storage_path: str
    log_level: str

    @staticmethod
    def from_env() -> "AppSettings":
        _load_dotenv_if_present()

        base_url = os.getenv("VET_API_URL", DEFAULT_API_URL).strip().rstrip("/")

        timeout_seconds = _int_env("VET_TIMEOUT_SECONDS", 30)
        query_retry_attempts = _int_env("VET_QUERY_RETRY_ATTEMPTS", 2)
        query_stale_seconds = _int_env("VET_QUERY_STALE_SECONDS", 300)

        default_storage_path = os.path.join(
            os.getenv("LOCALAPPDATA") or os.path.join(Path.home(), ".local", "share"),
            "VetClinicClient",
            "session.json",
        )
        storage_path = os.getenv("VET_STORAGE_PATH", default_storage_path).strip()
        log_level = os.getenv("VET_LOG_LEVEL", "INFO").strip().upper()

        settings = AppSettings(
            base_url=base_url,
            timeout_seconds=timeout_seconds,
            query_retry_attempts=query_retry_attempts,
            query_stale_seconds=query_stale_seconds,
            storage_path=storage_path,
            log_level=log_level,
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        problems = []
        if not self.base_url:
            problems.append("VET_API_URL is required")
        elif not self.base_url.startswith(("http://", "https://")):
            problems.append("VET_API_URL must start with http:// or https://")

        if self.timeout_seconds <= 0:
            problems.append("VET_TIMEOUT_SECONDS must be greater than 0")

        if self.query_retry_attempts < 0:
            problems.append("VET_QUERY_RETRY_ATTEMPTS must be 0 or greater")

        if self.query_stale_seconds < 0:
            problems.append("VET_QUERY_STALE_SECONDS must be 0 or greater")

        if not self.storage_path:
            problems.append("VET_STORAGE_PATH must not be empty")

        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if self.log_level not in valid_levels:
            problems.append("VET_LOG_LEVEL must be one of: " + ", ".join(sorted(valid_levels)))

        if problems:
            raise ConfigurationError("Invalid settings: " + "; ".join(problems))


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _load_dotenv_if_present(file_name: str = ".env") -> None:
    for candidate in _candidate_env_files(file_name):
        _load_env_file(candidate)


def _candidate_env_files(file_name: str) -> list[Path]:
    """Explicit ``VET_ENV_FILE`` first, then the working directory, then the project root."""
    explicit = os.getenv("VET_ENV_FILE", "").strip()
    candidates = [Path(explicit).expanduser()] if explicit else []
    candidates += [Path.cwd() / file_name, Path(__file__).resolve().parent.parent / file_name]

    # running from the project root names the same file twice
    unique: dict[Path, Path] = {}
    for path in candidates:
        unique.setdefault(path.resolve(), path)
    return list(unique.values())


def _load_env_file(path: Path) -> None:
    """Copy ``KEY=value`` lines into the environment without overriding it."""
    if not path.is_file():
        return

    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        logger.warning("Could not read env file %s", path)
        return

    for line in (raw.strip() for raw in lines):
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if sep and key:
            os.environ.setdefault(key, value.strip().strip("\"'"))
