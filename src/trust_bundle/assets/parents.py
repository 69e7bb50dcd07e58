"""Parents — the resolved dependencies handed to Asset.generate()."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from trust_bundle.domain.ports import Asset

A = TypeVar("A")


class Parents:
    """
    Resolved assets keyed by their type.

    An asset asks for exactly the types it listed in dependencies(); asking
    for anything else is a programming error and raises KeyError.
    """

    def __init__(self, assets: list[Asset] | None = None) -> None:
        self._assets: dict[type, Asset] = {}
        for asset in assets or []:
            self.add(asset)

    def add(self, asset: Asset) -> None:
        self._assets[type(asset)] = asset

    def get(self, asset_type: type[A]) -> A:
        try:
            return self._assets[asset_type]  # type: ignore[return-value]
        except KeyError:
            raise KeyError(f"{asset_type.__name__} is not among the resolved dependencies") from None

    def __contains__(self, asset_type: object) -> bool:
        return asset_type in self._assets

    def __len__(self) -> int:
        return len(self._assets)
