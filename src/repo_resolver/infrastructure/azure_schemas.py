"""Pydantic models for the Azure DevOps Git REST payloads we consume.

Only the fields the resolver reads are declared; anything else in the
payload is ignored.

* refs   — https://learn.microsoft.com/rest/api/azure/devops/git/refs/list
* items  — https://learn.microsoft.com/rest/api/azure/devops/git/items/get
* trees  — https://learn.microsoft.com/rest/api/azure/devops/git/trees/get
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class _Payload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class AzureRef(_Payload):
    name: str = ""
    object_id: str = Field(default="", alias="objectId")


class AzureItem(_Payload):
    object_id: str = Field(default="", alias="objectId")
    commit_id: str = Field(default="", alias="commitId")
    path: str = ""


class AzureTreeEntry(_Payload):
    relative_path: str = Field(alias="relativePath")


class RefList(_Payload):
    value: list[AzureRef] = Field(
        default_factory=list, validation_alias=AliasChoices("value", "Value")
    )


class ItemList(_Payload):
    value: list[AzureItem] = Field(
        default_factory=list, validation_alias=AliasChoices("value", "Value")
    )


class TreeResponse(_Payload):
    tree_entries: list[AzureTreeEntry] = Field(default_factory=list, alias="treeEntries")
