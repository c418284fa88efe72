"""Tests for enrichment data models and license normalization."""

import pytest

from depsync._enrichment.license_utils import (
    CUSTOM_LICENSE_REF,
    license_from_classifiers,
    normalize_license,
)
from depsync._enrichment.models import EnrichmentGapReport, GapReason, HashAlgorithm, HashRecord

LODASH_SRI = "sha512-Dh4h7PEF7IU9JNcohnrXBhPCFmOkaTB0sqNhnBvTnWa1iMM3I7tGbHJCToDjymPCSQeKs0e6uUKFAOfuQwWdDQ=="


class TestHashRecord:
    """Tests for SRI parsing."""

    def test_from_sri_sha512(self):
        """Test that an npm integrity string decodes to a hex SHA-512 digest."""
        record = HashRecord.from_sri(LODASH_SRI, download_url="https://registry.npmjs.org/lodash/-/lodash-4.17.21.tgz")
        assert record.algorithm is HashAlgorithm.SHA512
        assert len(record.value) == 128
        assert record.value.startswith("0e1e21ecf105")
        assert record.download_url.endswith("lodash-4.17.21.tgz")

    def test_first_known_token_wins(self):
        """Test multi-token SRI strings skip unknown algorithms."""
        record = HashRecord.from_sri(f"sha999-AAAA {LODASH_SRI}")
        assert record.algorithm is HashAlgorithm.SHA512

    @pytest.mark.parametrize("sri", ["", "nodash", "sha512-!!notbase64!!", "whirlpool-AAAA"])
    def test_invalid_sri(self, sri):
        """Test that unparseable SRI strings yield None."""
        assert HashRecord.from_sri(sri) is None

    def test_algorithm_spellings(self):
        """Test prefix parsing."""
        assert HashAlgorithm.from_prefix("SHA-256") is HashAlgorithm.SHA256
        assert HashAlgorithm.from_prefix("sha1") is HashAlgorithm.SHA1
        assert HashAlgorithm.from_prefix("crc32") is None


class TestEnrichmentGapReport:
    """Tests for the gap report counters."""

    def test_record_classifies_skip_and_failure(self):
        """Test that skip reasons and failure reasons land in different counters."""
        report = EnrichmentGapReport(total=4)
        report.record(GapReason.NO_VERSION)
        report.record(GapReason.UNSUPPORTED_ECOSYSTEM)
        report.record(GapReason.NOT_FOUND)
        report.record_enriched()

        assert (report.enriched, report.skipped, report.failed) == (1, 2, 1)
        assert report.accounted == 4
        assert report.is_consistent

    def test_to_dict_uses_camel_case_keys(self):
        """Test the serialised gap keys."""
        report = EnrichmentGapReport(total=1)
        report.record(GapReason.FETCH_ERROR)
        assert report.to_dict() == {
            "enriched": 0,
            "skipped": 0,
            "failed": 1,
            "total": 1,
            "gaps": {"noVersion": 0, "unsupportedEcosystem": 0, "notFound": 0, "fetchError": 1},
        }


class TestNormalizeLicense:
    """Tests for normalize_license."""

    @pytest.mark.parametrize("raw", [None, "", "   ", "NOASSERTION", "none", "UNKNOWN"])
    def test_no_information(self, raw):
        """Test that placeholders carry no license."""
        assert normalize_license(raw) is None

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("MIT", "MIT"),
            ("mit", "MIT"),
            ("Apache-2.0", "Apache-2.0"),
            ("MIT OR Apache-2.0", "MIT OR Apache-2.0"),
            ("The MIT License", "MIT"),
            ("Apache License, Version 2.0", "Apache-2.0"),
            ("BSD", "BSD-3-Clause"),
        ],
    )
    def test_known_licenses(self, raw, expected):
        """Test SPDX ids, expressions and exact aliases."""
        assert normalize_license(raw) == expected

    def test_license_text_becomes_custom_ref(self):
        """Test that a full license text is not stored verbatim."""
        text = "Permission is hereby granted, free of charge, to any person obtaining a copy\n" * 3
        assert normalize_license(text) == CUSTOM_LICENSE_REF

    def test_unrecognised_kept_stripped(self):
        """Test that unknown strings are kept rather than guessed."""
        assert normalize_license("  Acme Corp Internal  ") == "Acme Corp Internal"

    def test_license_from_classifiers(self):
        """Test trove classifier mapping."""
        classifiers = [
            "Programming Language :: Python :: 3",
            "License :: OSI Approved :: MIT License",
            "License :: OSI Approved :: Apache Software License",
        ]
        assert license_from_classifiers(classifiers) == "MIT OR Apache-2.0"
        assert license_from_classifiers(["License :: Other/Proprietary License"]) is None
