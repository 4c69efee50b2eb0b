import os
from pathlib import Path


class Settings:
    @property
    def llm_provider(self) -> str:
        return os.getenv("LLM_PROVIDER", "openai").lower()

    @property
    def llm_model(self) -> str:
        default = "gemini-2.0-flash" if self.llm_provider == "gemini" else "gpt-4o"
        return os.getenv("LLM_MODEL", default)

    @property
    def llm_temperature(self) -> float:
        try:
            return max(0.0, float(os.getenv("LLM_TEMPERATURE", "0.7")))
        except Exception:
            return 0.7

    @property
    def openai_api_key(self) -> str | None:
        return os.getenv("OPENAI_API_KEY")

    @property
    def google_api_key(self) -> str | None:
        return os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")

    @property
    def analysis_max_tokens(self) -> int:
        try:
            return max(1, int(os.getenv("ANALYSIS_MAX_TOKENS", "300")))
        except Exception:
            return 300

    @property
    def plan_max_tokens(self) -> int:
        try:
            return max(1, int(os.getenv("PLAN_MAX_TOKENS", "2000")))
        except Exception:
            return 2000

    @property
    def fitplan_api_url(self) -> str:
        return os.getenv("FITPLAN_API_URL", "http://localhost:8000")

    @property
    def client_timeout_seconds(self) -> float:
        try:
            return max(1.0, float(os.getenv("FITPLAN_CLIENT_TIMEOUT", "120")))
        except Exception:
            return 120.0

    @property
    def snapshot_path(self) -> Path:
        raw = os.getenv("FITPLAN_SNAPSHOT_PATH")
        if raw:
            return Path(raw).expanduser()
        return Path.home() / ".fitplan" / "fitness_plan.json"


settings = Settings()
