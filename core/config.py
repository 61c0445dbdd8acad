"""
Configuration - process-wide settings.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, field_validator
from typing import Optional


class BackendSettings(BaseModel):
    # k8s service name (or host:port) of the prime backend
    address: str = "http-prime.default.svc.cluster.local"
    # Authority/Host to use when running outside of the cluster
    host: Optional[str] = None
    # Skip TLS for gRPC calls
    insecure: bool = True
    use_grpc: bool = False
    # Seconds the gRPC channel has to become ready
    dial_timeout: float = 4.0
    grpc_service: str = "proto.PrimeService"

    @field_validator("host", mode="before")
    @classmethod
    def _empty_host_is_unset(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("dial_timeout")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("dial_timeout must be positive")
        return v


class Settings(BaseSettings):
    """Project settings."""

    PROJECT_NAME: str = Field(default="Prime Frontend")
    VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)

    PORT: int = Field(default=8080)
    # Directory holding index.html and static/ (ko convention)
    KO_DATA_PATH: str = Field(default="./kodata/")

    backend: BackendSettings = Field(default_factory=BackendSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        env_nested_delimiter="__",
    )

    @field_validator("KO_DATA_PATH", mode="before")
    @classmethod
    def _default_ko_path(cls, v):
        # An exported but empty KO_DATA_PATH falls back to the default
        if v is None or (isinstance(v, str) and not v.strip()):
            return "./kodata/"
        return v


settings = Settings()
