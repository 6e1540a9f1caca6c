from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class AppSettings:
    env: str
    api_url: str
    ontology_url: str
    tdr_api_url: str
    terra_url: str
    app_origin: str
    support_url: str
    error_report_url: str
    login_path: str
    timeout_seconds: int
    job_poll_interval_seconds: float
    job_max_polls: int
    report_workers: int

    @staticmethod
    def from_env() -> "AppSettings":
        _load_dotenv_if_present()

        settings = AppSettings(
            env=os.getenv("DUOS_ENV", "prod").strip().lower(),
            api_url=os.getenv("DUOS_API_URL", "").strip().rstrip("/"),
            ontology_url=os.getenv("DUOS_ONTOLOGY_URL", "").strip().rstrip("/"),
            tdr_api_url=os.getenv("DUOS_TDR_API_URL", "").strip().rstrip("/"),
            terra_url=os.getenv("DUOS_TERRA_URL", "https://app.terra.bio").strip().rstrip("/"),
            app_origin=os.getenv("DUOS_APP_ORIGIN", "http://localhost:3000").strip().rstrip("/"),
            support_url=os.getenv("DUOS_SUPPORT_URL", "https://broadinstitute.zendesk.com").strip().rstrip("/"),
            error_report_url=os.getenv("DUOS_ERROR_REPORT_URL", "").strip(),
            login_path=os.getenv("DUOS_LOGIN_PATH", "/home").strip(),
            timeout_seconds=int(os.getenv("DUOS_TIMEOUT_SECONDS", "45")),
            job_poll_interval_seconds=float(os.getenv("DUOS_JOB_POLL_INTERVAL_SECONDS", "1.0")),
            job_max_polls=int(os.getenv("DUOS_JOB_MAX_POLLS", "0")),
            report_workers=int(os.getenv("DUOS_REPORT_WORKERS", "2")),
        )
        settings.validate()
        return settings

    @property
    def is_local(self) -> bool:
        return self.env == "local"

    def api_base(self, local_base: str = "") -> str:
        return local_base if self.is_local else self.api_url

    def ontology_base(self, local_base: str = "") -> str:
        return local_base if self.is_local else self.ontology_url

    def tdr_repository_base(self) -> str:
        if not self.tdr_api_url:
            raise ConfigurationError("DUOS_TDR_API_URL is required for data repository calls")
        return f"{self.tdr_api_url}/api/repository/v1"

    def validate(self) -> None:
        missing = []
        if not self.is_local:
            if not self.api_url:
                missing.append("DUOS_API_URL")
            if not self.ontology_url:
                missing.append("DUOS_ONTOLOGY_URL")

        if missing:
            raise ConfigurationError(
                "Missing required settings: " + ", ".join(missing)
            )

        url_fields = {
            "DUOS_API_URL": self.api_url,
            "DUOS_ONTOLOGY_URL": self.ontology_url,
            "DUOS_TDR_API_URL": self.tdr_api_url,
            "DUOS_TERRA_URL": self.terra_url,
            "DUOS_APP_ORIGIN": self.app_origin,
            "DUOS_SUPPORT_URL": self.support_url,
            "DUOS_ERROR_REPORT_URL": self.error_report_url,
        }
        invalid_urls = [
            name
            for name, value in url_fields.items()
            if value and not value.startswith(("http://", "https://"))
        ]
        if invalid_urls:
            raise ConfigurationError(
                "URLs must start with http:// or https://: " + ", ".join(invalid_urls)
            )

        if not self.login_path.startswith("/"):
            raise ConfigurationError("DUOS_LOGIN_PATH must start with '/'")

        if self.timeout_seconds <= 0:
            raise ConfigurationError("DUOS_TIMEOUT_SECONDS must be greater than 0")

        if self.job_poll_interval_seconds <= 0:
            raise ConfigurationError("DUOS_JOB_POLL_INTERVAL_SECONDS must be greater than 0")

        if self.job_max_polls < 0:
            raise ConfigurationError("DUOS_JOB_MAX_POLLS must be 0 or greater")

        if self.report_workers < 1:
            raise ConfigurationError("DUOS_REPORT_WORKERS must be 1 or greater")


def _load_dotenv_if_present() -> None:
    """Apply ``DUOS_*`` settings from ``$DUOS_ENV_FILE`` or ``./.env``.

    Variables already present in the environment win.
    """
    explicit = os.getenv("DUOS_ENV_FILE", "").strip()
    path = Path(explicit).expanduser() if explicit else Path.cwd() / ".env"
    for key, value in _read_env_file(path).items():
        if key.startswith("DUOS_"):
            os.environ.setdefault(key, value)


def _read_env_file(path: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError:
        return values

    for raw_line in lines:
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = (part.strip() for part in line.split("=", 1))
        if key:
            values[key] = value.strip('"').strip("'")
    return values
