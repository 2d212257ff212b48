from dataclasses import dataclass
from graphlib import TopologicalSorter
from typing import Callable, Iterable, List, Optional, Tuple

from topology.descriptors import (
    AliasRecord,
    Certificate,
    EdgeDistribution,
    HostedZoneRef,
    OriginStore,
)
from topology.errors import RecordNameMismatch

ORIGIN_NODE_ID = "WebsiteBucket"
CERTIFICATE_NODE_ID = "SiteCertificate"
DISTRIBUTION_NODE_ID = "WebsiteDistribution"
ALIAS_RECORD_NODE_ID = "AliasRecord"

ZoneResolver = Callable[[str], HostedZoneRef]


@dataclass(frozen=True)
class Topology:
    """
    The complete, write-once resource graph for one site.
    Handed as a whole to the CDK stacks; never partially built.
    """
    origin: OriginStore
    zone: HostedZoneRef
    certificate: Certificate
    distribution: EdgeDistribution
    alias_record: AliasRecord

    @property
    def domain_name(self) -> str:
        return self.alias_record.record_name

    @property
    def nodes(self) -> tuple:
        return (self.origin, self.zone, self.certificate, self.distribution, self.alias_record)

    @property
    def edges(self) -> List[Tuple[str, str]]:
        """(dependent, dependency) pairs."""
        return [(node.node_id, dep) for node in self.nodes for dep in node.depends_on]

    def creation_order(self) -> List[str]:
        sorter = TopologicalSorter({node.node_id: node.depends_on for node in self.nodes})
        return list(sorter.static_order())

    def teardown_order(self) -> List[str]:
        return list(reversed(self.creation_order()))


def normalize_domain(domain_name: str) -> str:
    normalized = (domain_name or "").strip().rstrip(".").lower()
    if not normalized:
        raise ValueError("A domain name is required to build the site topology")
    return normalized


def build_origin_store(node_id: str = ORIGIN_NODE_ID) -> OriginStore:
    return OriginStore(node_id=node_id)


def build_certificate(
    domain_name: str,
    zone: HostedZoneRef,
    subject_alternative_names: Iterable[str] = (),
) -> Certificate:
    # issuing_region always takes CERTIFICATE_REGION
    return Certificate(
        node_id=CERTIFICATE_NODE_ID,
        domain_name=domain_name,
        zone=zone,
        subject_alternative_names=tuple(subject_alternative_names),
    )


def build_edge_distribution(
    origin: OriginStore,
    certificate: Optional[Certificate],
    domain_aliases: Iterable[str],
) -> EdgeDistribution:
    return EdgeDistribution(
        node_id=DISTRIBUTION_NODE_ID,
        origin=origin,
        certificate=certificate,
        domain_aliases=tuple(domain_aliases),
    )


def build_alias_record(zone: HostedZoneRef, record_name: str, target: EdgeDistribution) -> AliasRecord:
    if record_name not in target.domain_aliases:
        raise RecordNameMismatch(record_name, target.domain_aliases)
    return AliasRecord(node_id=ALIAS_RECORD_NODE_ID, zone=zone, record_name=record_name, target=target)


def build_topology(
    domain_name: str,
    resolver: ZoneResolver,
    *,
    subject_alternative_names: Iterable[str] = (),
) -> Topology:
    """
    Assembles the five resource descriptors for serving an SPA on `domain_name`.

    The hosted zone is resolved first so that a missing zone fails the build
    before anything else is described. Every invariant is checked as each
    descriptor is created; any error aborts the whole build.
    """
    domain_name = normalize_domain(domain_name)
    sans = tuple(normalize_domain(name) for name in subject_alternative_names)

    zone = resolver(domain_name)
    origin = build_origin_store()
    certificate = build_certificate(domain_name, zone, sans)
    distribution = build_edge_distribution(origin, certificate, (domain_name,))
    alias_record = build_alias_record(zone, domain_name, distribution)

    return Topology(
        origin=origin,
        zone=zone,
        certificate=certificate,
        distribution=distribution,
        alias_record=alias_record,
    )
