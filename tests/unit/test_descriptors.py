"""Tests for descriptor invariants."""

import dataclasses

import pytest

from topology.descriptors import (
    AliasRecord,
    Certificate,
    EdgeDistribution,
    HostedZoneRef,
    OriginStore,
)
from topology.errors import (
    MissingCertificateForAlias,
    RecordNameMismatch,
    TopologyError,
)


@pytest.fixture
def zone() -> HostedZoneRef:
    return HostedZoneRef(node_id="HostedZone", domain_name="example.org", zone_name="example.org", zone_id="Z1")


@pytest.fixture
def certificate(zone) -> Certificate:
    return Certificate(node_id="SiteCertificate", domain_name="example.org", zone=zone)


class TestOriginStore:

    def test_unencrypted_rejected(self):
        with pytest.raises(TopologyError):
            OriginStore(node_id="WebsiteBucket", encrypted=False)

    def test_public_access_rejected(self):
        with pytest.raises(TopologyError):
            OriginStore(node_id="WebsiteBucket", public_access=True)

    def test_descriptors_are_immutable(self):
        origin = OriginStore(node_id="WebsiteBucket")

        with pytest.raises(dataclasses.FrozenInstanceError):
            origin.encrypted = False


class TestCertificate:

    def test_other_region_rejected(self, zone):
        with pytest.raises(TopologyError):
            Certificate(node_id="SiteCertificate", domain_name="example.org", zone=zone, issuing_region="eu-west-1")

    @pytest.mark.parametrize(
        "name, covered",
        [
            ("example.org", True),
            ("www.example.org", True),
            ("a.b.example.org", False),
            ("example.com", False),
        ],
    )
    def test_covers(self, zone, name, covered):
        certificate = Certificate(
            node_id="SiteCertificate",
            domain_name="example.org",
            zone=zone,
            subject_alternative_names=("*.example.org",),
        )

        assert certificate.covers(name) is covered

    def test_depends_on_zone(self, certificate):
        assert certificate.depends_on == ("HostedZone",)


class TestEdgeDistribution:

    def test_alias_without_certificate(self):
        """Aliases with no certificate fail immediately."""
        with pytest.raises(MissingCertificateForAlias) as exc_info:
            EdgeDistribution(
                node_id="WebsiteDistribution",
                origin=OriginStore(node_id="WebsiteBucket"),
                certificate=None,
                domain_aliases=("example.org",),
            )

        assert exc_info.value.alias == "example.org"

    def test_alias_not_covered_by_certificate(self, certificate):
        with pytest.raises(MissingCertificateForAlias):
            EdgeDistribution(
                node_id="WebsiteDistribution",
                origin=OriginStore(node_id="WebsiteBucket"),
                certificate=certificate,
                domain_aliases=("example.org", "shop.example.org"),
            )

    def test_plain_http_rejected(self, certificate):
        with pytest.raises(TopologyError):
            EdgeDistribution(
                node_id="WebsiteDistribution",
                origin=OriginStore(node_id="WebsiteBucket"),
                certificate=certificate,
                domain_aliases=("example.org",),
                viewer_protocol_policy="allow-all",
            )


class TestAliasRecord:

    @pytest.fixture
    def distribution(self, certificate) -> EdgeDistribution:
        return EdgeDistribution(
            node_id="WebsiteDistribution",
            origin=OriginStore(node_id="WebsiteBucket"),
            certificate=certificate,
            domain_aliases=("example.org",),
        )

    def test_record_name_mismatch(self, zone, distribution):
        with pytest.raises(RecordNameMismatch):
            AliasRecord(node_id="AliasRecord", zone=zone, record_name="www.example.org", target=distribution)

    def test_record_in_other_zone_rejected(self, distribution):
        other_zone = HostedZoneRef(
            node_id="HostedZone", domain_name="example.org", zone_name="example.org", zone_id="Z2"
        )

        with pytest.raises(TopologyError):
            AliasRecord(node_id="AliasRecord", zone=other_zone, record_name="example.org", target=distribution)

    def test_depends_on_zone_and_distribution(self, zone, distribution):
        record = AliasRecord(node_id="AliasRecord", zone=zone, record_name="example.org", target=distribution)

        assert record.depends_on == ("HostedZone", "WebsiteDistribution")
