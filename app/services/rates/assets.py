from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional

from app.models.constants import CURRENCY_TABLE, CurrencyInfo


@dataclass(frozen=True)
class CurrencyAsset:
    code: str
    name: str
    flag: str
    flag_url: str


class AssetResolver:
    """Maps currency codes to display name + flag image URL.

    Unknown codes resolve to None; callers keep whatever icon they had.
    """

    def __init__(
        self,
        flag_cdn_base_url: str,
        table: Optional[Mapping[str, CurrencyInfo]] = None,
    ):
        self._base = flag_cdn_base_url.rstrip("/")
        self._table: Mapping[str, CurrencyInfo] = table or CURRENCY_TABLE

    def resolve(self, code: str) -> Optional[CurrencyAsset]:
        code = (code or "").upper()
        info = self._table.get(code)
        if not info or not info.get("flag"):
            return None
        return CurrencyAsset(
            code=code,
            name=info["name"],
            flag=info["flag"],
            flag_url=f"{self._base}/{info['flag']}.png",
        )

    def all(self) -> List[CurrencyAsset]:
        out: List[CurrencyAsset] = []
        for code in sorted(self._table):
            asset = self.resolve(code)
            if asset:
                out.append(asset)
        return out
