"""
Version domain models.

GitVersion is the typed form of the JSON document printed by
``dotnet-gitversion``. Every field carries its external key as an alias;
VERSION_FIELDS flattens the model into a table that the publisher and the
renderer iterate over, so no field is handled by hand more than once.
"""

from __future__ import annotations

from typing import Annotated, Any, NamedTuple, get_args, get_origin

from pydantic import ConfigDict, Field, ValidationInfo, field_validator, model_validator

from .base import ImmutableModel

ENV_KEY_PREFIX = "GITVERSION_"

# Canonical payload substituted when the version tool yields nothing.
EMPTY_PAYLOAD = "{}"

# Non-negative count, used inside Optional so the bound applies to the int branch only.
Count = Annotated[int, Field(ge=0)]

_DEPRECATED: dict[str, Any] = {"deprecated": True}

# Fields a non-empty payload must always carry.
_CORE_NUMBERS = (("major", "Major"), ("minor", "Minor"), ("patch", "Patch"))


class GitVersion(ImmutableModel):
    """Version facts describing one commit, as computed by GitVersion.

    Unknown keys in the source document are ignored. Missing strings
    default to ``""`` and missing counts to ``0``, except for
    ``pre_release_number`` and ``build_meta_data`` which stay ``None``
    when absent so that an explicit ``0`` remains distinguishable.
    """

    model_config = ConfigDict(extra="ignore")

    major: int = Field(
        0,
        ge=0,
        alias="Major",
        description="The major version. Should be incremented on breaking changes.",
    )
    minor: int = Field(
        0,
        ge=0,
        alias="Minor",
        description="The minor version. Should be incremented on new features.",
    )
    patch: int = Field(
        0,
        ge=0,
        alias="Patch",
        description="The patch version. Should be incremented on bug fixes.",
    )
    pre_release_tag: str = Field(
        "",
        alias="PreReleaseTag",
        description="The pre-release label suffixed by the pre_release_number.",
    )
    pre_release_tag_with_dash: str = Field(
        "",
        alias="PreReleaseTagWithDash",
        description="The pre-release tag prefixed with a dash.",
    )
    pre_release_label: str = Field(
        "",
        alias="PreReleaseLabel",
        description="The pre-release label.",
    )
    pre_release_label_with_dash: str = Field(
        "",
        alias="PreReleaseLabelWithDash",
        description="The pre-release label prefixed with a dash.",
    )
    pre_release_number: Count | None = Field(
        None,
        alias="PreReleaseNumber",
        description="The pre-release number, or None on stable builds.",
    )
    weighted_pre_release_number: int = Field(
        0,
        ge=0,
        alias="WeightedPreReleaseNumber",
        description=(
            "Sum of the branch pre-release weight and the pre_release_number. "
            "Monotonically increasing across branches."
        ),
    )
    build_meta_data: Count | None = Field(
        None,
        alias="BuildMetaData",
        description=(
            "The build metadata, usually the number of commits since "
            "version_source_sha, or None when not supplied."
        ),
    )
    build_meta_data_padded: str = Field(
        "",
        alias="BuildMetaDataPadded",
        description="The build_meta_data padded with 0 up to 4 digits.",
    )
    full_build_meta_data: str = Field(
        "",
        alias="FullBuildMetaData",
        description="The build_meta_data suffixed with branch_name and sha.",
    )
    major_minor_patch: str = Field(
        "",
        alias="MajorMinorPatch",
        description="major, minor and patch joined together, separated by '.'.",
    )
    semver: str = Field(
        "",
        alias="SemVer",
        description=(
            "The semantic version number, including pre_release_tag_with_dash "
            "for pre-release versions."
        ),
    )
    legacy_semver: str = Field(
        "",
        alias="LegacySemVer",
        json_schema_extra=_DEPRECATED,
        description="Equal to semver, without a '.' between label and number.",
    )
    legacy_semver_padded: str = Field(
        "",
        alias="LegacySemVerPadded",
        json_schema_extra=_DEPRECATED,
        description="Equal to legacy_semver, with the number padded to 4 digits.",
    )
    assembly_semver: str = Field(
        "",
        alias="AssemblySemVer",
        json_schema_extra=_DEPRECATED,
        description="Defaults to major.minor.0.0 (suitable for .NET AssemblyVersion).",
    )
    assembly_sem_file_version: str = Field(
        "",
        alias="AssemblySemFileVer",
        json_schema_extra=_DEPRECATED,
        description="Defaults to major.minor.patch.0 (suitable for .NET AssemblyFileVersion).",
    )
    informational_version: str = Field(
        "",
        alias="InformationalVersion",
        description="Defaults to full_semver suffixed by full_build_meta_data.",
    )
    full_semver: str = Field(
        "",
        alias="FullSemVer",
        description="The full, SemVer 2.0 compliant version number.",
    )
    branch_name: str = Field(
        "",
        alias="BranchName",
        description="The name of the checked out Git branch.",
    )
    escaped_branch_name: str = Field(
        "",
        alias="EscapedBranchName",
        description="Equal to branch_name, with '/' replaced by '-'.",
    )
    sha: str = Field(
        "",
        alias="Sha",
        description="The SHA of the Git commit.",
    )
    short_sha: str = Field(
        "",
        alias="ShortSha",
        description="The sha limited to 7 characters.",
    )
    nuget_version_v2: str = Field(
        "",
        alias="NuGetVersionV2",
        json_schema_extra=_DEPRECATED,
        description="A NuGet 2.0 compatible version number.",
    )
    nuget_version: str = Field(
        "",
        alias="NuGetVersion",
        json_schema_extra=_DEPRECATED,
        description="A NuGet 1.0 compatible version number.",
    )
    nuget_prerelease_tag_v2: str = Field(
        "",
        alias="NuGetPreReleaseTagV2",
        json_schema_extra=_DEPRECATED,
        description="A NuGet 2.0 compatible pre_release_tag.",
    )
    nuget_prerelease_tag: str = Field(
        "",
        alias="NuGetPreReleaseTag",
        json_schema_extra=_DEPRECATED,
        description="A NuGet 1.0 compatible pre_release_tag.",
    )
    version_source_sha: str = Field(
        "",
        alias="VersionSourceSha",
        description="The SHA of the commit used as version source.",
    )
    commits_since_version_source: int = Field(
        0,
        ge=0,
        alias="CommitsSinceVersionSource",
        description="The number of commits since the version source.",
    )
    commits_since_version_source_padded: str = Field(
        "",
        alias="CommitsSinceVersionSourcePadded",
        description="The commits_since_version_source padded with 0 up to 4 digits.",
    )
    uncommitted_changes: int = Field(
        0,
        ge=0,
        alias="UncommittedChanges",
        description="The number of uncommitted changes present in the repository.",
    )
    commit_date: str = Field(
        "",
        alias="CommitDate",
        description="The ISO-8601 formatted date of the commit identified by sha.",
    )

    @model_validator(mode="before")
    @classmethod
    def require_core_numbers(cls, data: Any, info: ValidationInfo) -> Any:
        """Reject a non-empty document that lacks Major, Minor or Patch.

        The empty document is the degraded-mode payload and decodes to
        all defaults. JSON documents only count the external keys; Python
        construction may use field names as well.
        """
        if isinstance(data, dict) and data:
            by_name = info.mode == "python"
            missing = [
                alias
                for name, alias in _CORE_NUMBERS
                if alias not in data and not (by_name and name in data)
            ]
            if missing:
                raise ValueError(f"missing required field(s): {', '.join(missing)}")
        return data

    @field_validator("*", mode="before")
    @classmethod
    def null_string_as_empty(cls, value: Any, info: ValidationInfo) -> Any:
        """GitVersion emits null for some unset strings; treat it as empty."""
        if value is None and cls.model_fields[info.field_name].annotation is str:
            return ""
        return value

    def consistency_issues(self) -> list[str]:
        """Check the pass-through renderings against the fields they derive from.

        Returns:
            One message per disagreement; empty when everything agrees.
        """
        issues: list[str] = []

        if self.build_meta_data is not None and self.build_meta_data_padded:
            expected = f"{self.build_meta_data:04d}"
            if self.build_meta_data_padded != expected:
                issues.append(
                    f"build_meta_data_padded is {self.build_meta_data_padded!r}, "
                    f"expected {expected!r}"
                )

        if self.commits_since_version_source_padded:
            expected = f"{self.commits_since_version_source:04d}"
            if self.commits_since_version_source_padded != expected:
                issues.append(
                    f"commits_since_version_source_padded is "
                    f"{self.commits_since_version_source_padded!r}, expected {expected!r}"
                )

        if self.sha and self.short_sha and self.short_sha != self.sha[:7]:
            issues.append(f"short_sha {self.short_sha!r} is not a prefix of sha {self.sha!r}")

        return issues

    def __str__(self) -> str:
        return self.semver


class FieldSpec(NamedTuple):
    """One row of the version field table."""

    name: str
    alias: str
    kind: type
    optional: bool
    deprecated: bool
    doc: str

    @property
    def env_key(self) -> str:
        """Build-environment key, e.g. ``GITVERSION_FULL_SEMVER``."""
        return f"{ENV_KEY_PREFIX}{self.name.upper()}"

    @property
    def type_hint(self) -> str:
        """Python annotation used in the generated module."""
        hint = self.kind.__name__
        return f"Optional[{hint}]" if self.optional else hint


def _build_field_table() -> tuple[FieldSpec, ...]:
    specs = []
    for name, info in GitVersion.model_fields.items():
        args = get_args(info.annotation)
        optional = type(None) in args
        kind = next(a for a in args if a is not type(None)) if optional else info.annotation
        if get_origin(kind) is Annotated:
            kind = get_args(kind)[0]
        extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
        specs.append(
            FieldSpec(
                name=name,
                alias=info.alias or name,
                kind=kind,
                optional=optional,
                deprecated=bool(extra.get("deprecated", False)),
                doc=info.description or "",
            )
        )
    return tuple(specs)


VERSION_FIELDS: tuple[FieldSpec, ...] = _build_field_table()
