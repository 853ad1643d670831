from __future__ import annotations

from domain.errors import ConfigurationError
from domain.reward import Coin

# Tickers that do not follow the suffix rule below.
ASSET_ALIASES = {
    "ETH2": "ETH",
    "XETH": "ETH",
    "XXBT": "BTC",
    "XBT": "BTC",
    "XXTZ": "XTZ",
    "USDC.M": "USDC",
}

STAKING_SUFFIXES = (".S", ".P", ".B")

# Coins that can be assigned to exports which do not name the asset.
CONFIGURABLE_COINS = (Coin.DOT, Coin.KSM)


def _strip_staking_suffix(code: str) -> str:
    for suffix in STAKING_SUFFIXES:
        if code.endswith(suffix) and len(code) > len(suffix):
            base = code[: -len(suffix)]
            return base.rstrip("0123456789") or base
    return code


def normalize_coin(raw: str) -> str:
    """Map an exchange ticker to its canonical symbol.

    `DOT.S`, `DOT28.S` -> `DOT`, `ETH2.S` -> `ETH`. Stacked suffixes are
    stripped one after another. Unknown tickers come back upper-cased but
    otherwise untouched.
    """
    code = raw.strip().upper()
    while code not in ASSET_ALIASES:
        base = _strip_staking_suffix(code)
        if base == code:
            return code
        code = base
    return ASSET_ALIASES[code]


def is_known_coin(symbol: str) -> bool:
    return symbol in Coin.__members__


def parse_coin(raw: str | Coin) -> Coin:
    symbol = normalize_coin(str(raw))
    if not is_known_coin(symbol):
        raise ConfigurationError(f"Unsupported coin: {raw!r}")
    return Coin(symbol)


def parse_configured_coin(raw: str | Coin) -> Coin:
    coin = parse_coin(raw)
    if coin not in CONFIGURABLE_COINS:
        expected = " or ".join(str(choice) for choice in CONFIGURABLE_COINS)
        raise ConfigurationError(f"Unsupported coin: {raw!r} (expected {expected})")
    return coin
