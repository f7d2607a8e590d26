import logging
import os
from typing import List, Optional
from urllib.parse import urlparse
from dotenv import load_dotenv

# Configuração de logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

# Carrega as variáveis de ambiente
load_dotenv(dotenv_path=".env", encoding="utf-8")

# Silencia logs do cliente HTTP
logging.getLogger("httpx").setLevel(logging.WARNING)

def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")

class Configuration:
    def __init__(self):

        # Url base
        self.base_url = os.getenv("BASE_URL", "http://localhost:8000")

        self.environment = os.getenv("ENVIRONMENT", "development").lower()

        # Supabase (os nomes VITE_ permitem reaproveitar o .env do frontend)
        self.supabase_url = (os.getenv("SUPABASE_URL") or os.getenv("VITE_SUPABASE_URL") or "").rstrip("/")
        self.supabase_anon_key = os.getenv("SUPABASE_ANON_KEY") or os.getenv("VITE_SUPABASE_ANON_KEY")
        self.supabase_service_role_key = os.getenv("SUPABASE_SERVICE_ROLE_KEY")
        self.supabase_jwt_secret = os.getenv("SUPABASE_JWT_SECRET")
        self.supabase_timeout_seconds = float(os.getenv("SUPABASE_TIMEOUT_SECONDS", 10))

        # Moeda
        self.currency = os.getenv("CURRENCY", "PHP")
        self.currency_locale = os.getenv("CURRENCY_LOCALE", "en_PH")

        self.cors_origins: List[str] = [
            origin.strip()
            for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
            if origin.strip()
        ]

        # Keep-alive
        self.keep_alive_enabled = _env_flag("KEEP_ALIVE_ENABLED")
        self.keep_alive_url = os.getenv("KEEP_ALIVE_URL", f"{self.base_url}/api/health")
        self.keep_alive_minutes = int(os.getenv("KEEP_ALIVE_MINUTES", 5))

    @property
    def supabase_key(self) -> Optional[str]:
        """Chave usada nas chamadas ao PostgREST; a service role tem prioridade."""
        return self.supabase_service_role_key or self.supabase_anon_key

    def has_supabase(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    def supabase_project(self) -> str:
        # https://abcdxyz.supabase.co -> abcdxyz
        # (primeiro rótulo do host)
        host = urlparse(self.supabase_url).netloc or self.supabase_url.replace("https://", "")
        return host.split(".")[0]
