from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    chain: str = "bsc"
    native_symbol: str = "BNB"
    native_name: str = "BNB"
    native_decimals: int = 18
    native_logo: str = "https://assets.coingecko.com/coins/images/825/small/bnb-icon2_2x.png"

    @field_validator("native_decimals")
    @classmethod
    def _non_negative_decimals(cls, v: int) -> int:
        if v < 0:
            raise ValueError("native_decimals must be >= 0")
        return v

    class Config:
        env_file = ".env"
        env_prefix = "TXEXPLAINER_"


settings = Settings()
