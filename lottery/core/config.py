
"""
config.py
Defines the LotteryConfig dataclass, which centralizes all tunable parameters of a lottery game,
and the JSON loader used by the console entry point.
Related modules:
- player.py: Players receive ticket bounds and cost from the config.
- prizes.py: Prize pools are derived from the configured percentages.
- game.py: LotteryGame owns one validated config per game.
"""

import json
from dataclasses import dataclass, fields
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from ..utils.logger import get_logger

logger = get_logger(__name__)


class ConfigurationError(ValueError):
    """
    Raised when the lottery settings violate a structural rule. Fatal to game startup.
    """
    pass


def to_decimal(value: Any) -> Decimal:
    """
    Convert an int/str/float/Decimal to Decimal without binary float artefacts.
    Args:
        value: Amount or fraction to convert.
    Returns:
        Decimal: Exact decimal value.
    Raises:
        ConfigurationError: If the value is not a finite number.
    """
    if isinstance(value, bool):
        raise ConfigurationError(f"Expected a number, got {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise ConfigurationError(f"Expected a number, got {value!r}") from None
    # NaN and Infinity compare badly and poison the prize arithmetic
    if not result.is_finite():
        raise ConfigurationError(f"Expected a finite number, got {value!r}")
    return result


_DECIMAL_FIELDS = (
    "initial_balance",
    "ticket_cost",
    "grand_prize_percentage",
    "second_tier_percentage",
    "third_tier_percentage",
)


@dataclass(frozen=True)
class LotteryConfig:
    """
    Centralizes all rule options and numeric constraints for a lottery game.
    Fields:
        min_ticket_count (int): Fewest tickets a player may buy in one purchase.
        max_ticket_count (int): Most tickets a player may buy in one purchase.
        initial_balance (Decimal): Starting balance of every player.
        ticket_cost (Decimal): Price of a single ticket.
        grand_prize_percentage (Decimal): Share of revenue paid to the grand prize winner.
        second_tier_percentage (Decimal): Share of revenue split among second tier winners.
        third_tier_percentage (Decimal): Share of revenue split among third tier winners.
    """
    min_ticket_count: int = 1
    max_ticket_count: int = 10
    initial_balance: Decimal = Decimal("10")
    ticket_cost: Decimal = Decimal("1")
    grand_prize_percentage: Decimal = Decimal("0.5")
    second_tier_percentage: Decimal = Decimal("0.3")
    third_tier_percentage: Decimal = Decimal("0.1")

    def __post_init__(self):
        for name in _DECIMAL_FIELDS:
            object.__setattr__(self, name, to_decimal(getattr(self, name)))

    @property
    def total_prize_percentage(self) -> Decimal:
        return self.grand_prize_percentage + self.second_tier_percentage + self.third_tier_percentage

    def validate(self) -> "LotteryConfig":
        """
        Check the structural rules of the settings, reporting the first one violated.
        Returns:
            LotteryConfig: self, so calls can be chained.
        Raises:
            ConfigurationError: If any rule is violated.
        """
        if self.min_ticket_count < 1:
            raise ConfigurationError("min_ticket_count must be at least 1")
        if self.max_ticket_count < self.min_ticket_count:
            raise ConfigurationError("max_ticket_count must be greater than or equal to min_ticket_count")
        if self.ticket_cost <= 0:
            raise ConfigurationError("ticket_cost must be greater than 0")
        if self.initial_balance < 0:
            raise ConfigurationError("initial_balance cannot be negative")
        for name in ("grand_prize_percentage", "second_tier_percentage", "third_tier_percentage"):
            value = getattr(self, name)
            if not (0 <= value <= 1):
                raise ConfigurationError(f"{name} must be between 0 and 1")
        if self.total_prize_percentage > 1:
            raise ConfigurationError("Total prize percentages cannot exceed 100%")

        # Not enforced: a player may be unable to afford the maximum purchase.
        max_cost = self.max_ticket_count * self.ticket_cost
        if max_cost > self.initial_balance:
            logger.warning(
                f"max_ticket_count x ticket_cost ({max_cost}) exceeds initial_balance "
                f"({self.initial_balance}); large purchases will fail"
            )
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def config_from_dict(data: Dict[str, Any]) -> LotteryConfig:
    """
    Build and validate a LotteryConfig from a mapping of field names.
    Args:
        data (dict): Settings, either flat or nested under a "lottery" section.
    Returns:
        LotteryConfig: The validated configuration.
    Raises:
        ConfigurationError: On unknown keys or invalid values.
    """
    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a JSON object")
    section = data.get("lottery", data)
    if not isinstance(section, dict):
        raise ConfigurationError("The 'lottery' section must be a JSON object")
    known = {f.name for f in fields(LotteryConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigurationError(f"Unknown configuration keys: {', '.join(unknown)}")
    for name in ("min_ticket_count", "max_ticket_count"):
        if name in section and (isinstance(section[name], bool) or not isinstance(section[name], int)):
            raise ConfigurationError(f"{name} must be an integer")
    return LotteryConfig(**section).validate()


def load_config(path: str) -> LotteryConfig:
    """
    Load lottery settings from a JSON file and validate them.
    Args:
        path (str): Path to the JSON settings file.
    Returns:
        LotteryConfig: The validated configuration.
    Raises:
        ConfigurationError: If the file cannot be read or the settings are invalid.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Malformed configuration file {path}: {e}") from e
    config = config_from_dict(data)
    logger.info(f"Loaded configuration from {path}")
    return config
