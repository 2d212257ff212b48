from dataclasses import dataclass
from typing import Optional, Tuple

from topology.errors import MissingCertificateForAlias, RecordNameMismatch, TopologyError

# CloudFront only accepts ACM certificates issued in us-east-1,
# whatever region the rest of the site is deployed to.
CERTIFICATE_REGION = "us-east-1"

REDIRECT_TO_HTTPS = "redirect-to-https"
DEFAULT_ROOT_OBJECT = "index.html"
SPA_FALLBACK_STATUSES = (403, 404)


@dataclass(frozen=True)
class OriginStore:
    """
    Private, encrypted S3 bucket holding the compiled SPA.
    It is only ever reached through the edge distribution.
    """
    node_id: str
    encrypted: bool = True
    public_access: bool = False

    def __post_init__(self):
        if not self.encrypted:
            raise TopologyError(f"Origin store '{self.node_id}' must be encrypted at rest")
        if self.public_access:
            raise TopologyError(
                f"Origin store '{self.node_id}' cannot be public when served through a custom domain"
            )

    @property
    def depends_on(self) -> Tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class HostedZoneRef:
    """Read-only reference to an existing Route53 zone. Never created or destroyed here."""
    node_id: str
    domain_name: str
    zone_name: str
    zone_id: str

    @property
    def depends_on(self) -> Tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class Certificate:
    """DNS-validated ACM certificate for the custom domain."""
    node_id: str
    domain_name: str
    zone: HostedZoneRef
    subject_alternative_names: Tuple[str, ...] = ()
    issuing_region: str = CERTIFICATE_REGION

    def __post_init__(self):
        if self.issuing_region != CERTIFICATE_REGION:
            raise TopologyError(
                f"Certificate '{self.node_id}' must be issued in {CERTIFICATE_REGION}, "
                f"got '{self.issuing_region}'"
            )

    @property
    def names(self) -> Tuple[str, ...]:
        return (self.domain_name,) + tuple(self.subject_alternative_names)

    def covers(self, name: str) -> bool:
        for candidate in self.names:
            if candidate == name:
                return True
            # A wildcard matches exactly one leftmost label
            if candidate.startswith("*.") and "." in name:
                label, rest = name.split(".", 1)
                if label and rest == candidate[2:]:
                    return True
        return False

    @property
    def depends_on(self) -> Tuple[str, ...]:
        return (self.zone.node_id,)


@dataclass(frozen=True)
class EdgeDistribution:
    """
    CloudFront distribution in front of the origin store.

    Any custom domain alias requires an attached certificate that covers it;
    this is checked when the descriptor is created, not at deploy time.
    """
    node_id: str
    origin: OriginStore
    certificate: Optional[Certificate]
    domain_aliases: Tuple[str, ...] = ()
    viewer_protocol_policy: str = REDIRECT_TO_HTTPS
    default_root_object: str = DEFAULT_ROOT_OBJECT
    fallback_statuses: Tuple[int, ...] = SPA_FALLBACK_STATUSES

    def __post_init__(self):
        if self.viewer_protocol_policy != REDIRECT_TO_HTTPS:
            raise TopologyError(
                f"Distribution '{self.node_id}' must redirect plain HTTP viewers to HTTPS"
            )
        for alias in self.domain_aliases:
            if self.certificate is None or not self.certificate.covers(alias):
                raise MissingCertificateForAlias(alias)

    @property
    def depends_on(self) -> Tuple[str, ...]:
        if self.certificate is None:
            return (self.origin.node_id,)
        return (self.origin.node_id, self.certificate.node_id)


@dataclass(frozen=True)
class AliasRecord:
    """Route53 A record aliasing the custom domain to the distribution."""
    node_id: str
    zone: HostedZoneRef
    record_name: str
    target: EdgeDistribution

    def __post_init__(self):
        if self.record_name not in self.target.domain_aliases:
            raise RecordNameMismatch(self.record_name, self.target.domain_aliases)
        certificate = self.target.certificate
        if certificate is not None and certificate.zone.zone_id != self.zone.zone_id:
            raise TopologyError(
                f"Record '{self.record_name}' must live in zone {certificate.zone.zone_id}, "
                f"the zone its certificate was validated against"
            )

    @property
    def depends_on(self) -> Tuple[str, ...]:
        return (self.zone.node_id, self.target.node_id)
