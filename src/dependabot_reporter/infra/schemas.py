from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class GhPackage(BaseModel):
	"""Package the alert was raised for"""
	name: Optional[str] = None
	ecosystem: Optional[str] = None


class GhDependency(BaseModel):
	package: GhPackage = Field(default_factory=GhPackage)
	manifest_path: Optional[str] = None
	scope: Optional[str] = None


class GhIdentifier(BaseModel):
	type: Optional[str] = None
	value: Optional[str] = None


class GhSecurityAdvisory(BaseModel):
	ghsa_id: Optional[str] = None
	summary: Optional[str] = None
	description: Optional[str] = None
	severity: Optional[str] = None
	identifiers: list[GhIdentifier] | None = None


class GhDependabotAlert(BaseModel):
	"""One element of GET /repos/{owner}/{repo}/dependabot/alerts.

	Only consumed fields are modelled; everything else in the payload is ignored.
	"""
	number: Optional[int] = None
	state: Optional[str] = None
	html_url: Optional[str] = None
	dependency: GhDependency = Field(default_factory=GhDependency)
	security_advisory: GhSecurityAdvisory = Field(default_factory=GhSecurityAdvisory)
