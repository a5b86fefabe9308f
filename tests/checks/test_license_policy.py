"""
Tests for license resolution and the license check.
"""

from package_health_gate.checks.base import Verdict
from package_health_gate.checks.license_policy import (
    ResolvedLicense,
    check_license,
    find_banned_license,
    license_summary,
    normalize_license,
    resolve_license,
)
from package_health_gate.config import GateConfig
from package_health_gate.sources.pypi import PackageMetadata
from package_health_gate.vcs.base import RepositorySnapshot

CONFIG = GateConfig()


def make_snapshot(license_id: str | None) -> RepositorySnapshot:
    return RepositorySnapshot(
        stargazer_count=0,
        fork_count=0,
        pushed_at=None,
        license_id=license_id,
        open_issue_count=0,
    )


class TestNormalizeLicense:
    def test_trims(self):
        assert normalize_license("  MIT  ") == "MIT"

    def test_placeholders_are_empty(self):
        assert normalize_license("UNKNOWN") == ""
        assert normalize_license("unknown") == ""
        assert normalize_license("NOASSERTION") == ""
        assert normalize_license(None) == ""
        assert normalize_license("   ") == ""

    def test_full_text_is_kept(self):
        text = "BSD 3-Clause License\n\nCopyright (c) 2024\nAll rights reserved.\n"
        assert normalize_license(text) == text.strip()

    def test_summary_is_first_line(self):
        text = "  BSD 3-Clause License\n\nCopyright (c) 2024\nAll rights reserved."
        assert license_summary(text) == "BSD 3-Clause License"
        assert license_summary("") == ""


class TestResolveLicense:
    def test_direct_field_wins(self):
        metadata = PackageMetadata(
            name="pkg",
            license="MIT",
            classifiers=["License :: OSI Approved :: Apache Software License"],
        )
        assert resolve_license(metadata) == ResolvedLicense("MIT", "license field")

    def test_last_classifier_used(self):
        metadata = PackageMetadata(
            name="pkg",
            license="",
            classifiers=[
                "Programming Language :: Python :: 3",
                "License :: OSI Approved",
                "License :: OSI Approved :: MIT License",
            ],
        )
        assert resolve_license(metadata).value == "MIT License"
        assert resolve_license(metadata).source == "classifiers"

    def test_unknown_field_falls_back_to_classifiers(self):
        metadata = PackageMetadata(
            name="pkg",
            license="UNKNOWN",
            classifiers=["License :: OSI Approved :: BSD License"],
        )
        assert resolve_license(metadata).value == "BSD License"

    def test_license_expression_used_when_field_empty(self):
        metadata = PackageMetadata(name="pkg", license=None, license_expression="Apache-2.0")
        assert resolve_license(metadata).value == "Apache-2.0"

    def test_repository_fallback(self):
        metadata = PackageMetadata(name="pkg", license=None)
        resolved = resolve_license(metadata, make_snapshot("Apache-2.0"))
        assert resolved == ResolvedLicense("Apache-2.0", "repository")

    def test_nothing_found(self):
        metadata = PackageMetadata(name="pkg", license="UNKNOWN")
        assert resolve_license(metadata, make_snapshot("NOASSERTION")).value == ""
        assert resolve_license(metadata).value == ""


class TestCheckLicense:
    def test_gpl_classifier_fails(self):
        resolved = ResolvedLicense("GNU General Public License v3 (GPLv3)", "classifiers")
        result = check_license(resolved, CONFIG)
        assert result.verdict is Verdict.FAIL
        assert result.details["banned"] == "GPL"

    def test_permissive_passes(self):
        result = check_license(ResolvedLicense("MIT", "license field"), CONFIG)
        assert result.name == "License"
        assert result.verdict is Verdict.PASS

    def test_missing_license_warns_and_fails_run(self):
        result = check_license(ResolvedLicense(""), CONFIG)
        assert result.verdict is Verdict.WARN
        assert result.is_failure
        assert "Insufficient license information" in result.message

    def test_custom_denylist(self):
        config = GateConfig(banned_licenses=("MIT",))
        result = check_license(ResolvedLicense("MIT License"), config)
        assert result.verdict is Verdict.FAIL

    def test_banned_token_on_later_line_fails(self):
        metadata = PackageMetadata(
            name="pkg", license="MIT\nBundled parts are GPL-3.0"
        )
        resolved = resolve_license(metadata)
        assert resolved == ResolvedLicense(
            "MIT\nBundled parts are GPL-3.0", "license field"
        )

        result = check_license(resolved, CONFIG)
        assert result.verdict is Verdict.FAIL
        assert result.details["banned"] == "GPL"
        assert result.details["summary"] == "MIT"
        assert "\n" not in result.message


def test_substring_matching_is_coarse():
    assert find_banned_license("LGPL-2.1-or-later", ("GPL", "LGPL")) == "GPL"
    assert find_banned_license("Apache-2.0", CONFIG.banned_licenses) is None
    assert find_banned_license("CC0-1.0", CONFIG.banned_licenses) == "CC"
