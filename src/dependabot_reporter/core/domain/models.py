from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .enums import AlertState


CVE_IDENTIFIER_TYPE = "CVE"


@dataclass(frozen=True)
class Identifier:
    type: str
    value: str


@dataclass(frozen=True)
class Alert:
    state: str
    html_url: str

    package_name: str
    ecosystem: str
    manifest_path: str

    severity: str
    description: str
    identifiers: tuple[Identifier, ...] = field(default_factory=tuple)

    number: Optional[int] = None
    scope: Optional[str] = None  # "runtime" / "development"
    ghsa_id: Optional[str] = None
    summary: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.state == AlertState.OPEN.value

    @property
    def cve_id(self) -> Optional[str]:
        """Value of the first CVE-typed identifier, in advisory order."""
        for ident in self.identifiers:
            if ident.type == CVE_IDENTIFIER_TYPE:
                return ident.value
        return None
