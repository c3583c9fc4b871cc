from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    api_host: str = "0.0.0.0"
    api_port: int = 8080
    log_level: str = "INFO"

    # Serial GPS reader (empty port = disabled)
    serial_port: str = ""
    serial_baud: int = 9600

    # Health reports "stale" once the newest sentence is older than this
    stale_after_s: float = 5.0

    model_config = {"env_prefix": "NMEA_GPS_"}

    @property
    def reader_enabled(self) -> bool:
        return bool(self.serial_port)
