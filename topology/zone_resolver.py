from typing import Any, Optional

import boto3
import tldextract

from topology.descriptors import HostedZoneRef
from topology.errors import TopologyError, ZoneNotFound

HOSTED_ZONE_NODE_ID = "HostedZone"

# Bundled public suffix snapshot only, so synth never reaches out to the network
_extract = tldextract.TLDExtract(suffix_list_urls=())


def zone_name_for(domain_name: str) -> str:
    """
    Returns the registrable apex that owns the domain,
    e.g. 'example.co.uk' for 'www.example.co.uk'.
    """
    extracted = _extract(domain_name)
    if not extracted.domain or not extracted.suffix:
        raise TopologyError(f"'{domain_name}' is not a registrable domain name")
    return f"{extracted.domain}.{extracted.suffix}"


def _listing_key(name: str) -> str:
    return ".".join(reversed(name.split(".")))


def is_within(domain_name: str, zone_name: str) -> bool:
    """True when zone_name equals domain_name or is one of its parent domains."""
    return domain_name == zone_name or domain_name.endswith(f".{zone_name}")


class StaticZoneResolver:
    """
    Uses a hosted zone id supplied through configuration.
    Skips the Route53 lookup entirely. The zone name defaults to the apex.
    """
    def __init__(self, zone_id: str, zone_name: Optional[str] = None):
        self.zone_id = zone_id
        self.zone_name = zone_name

    def __call__(self, domain_name: str) -> HostedZoneRef:
        zone_name = self.zone_name or zone_name_for(domain_name)
        if not is_within(domain_name, zone_name):
            raise TopologyError(f"Hosted zone '{zone_name}' cannot hold records for '{domain_name}'")
        return HostedZoneRef(
            node_id=HOSTED_ZONE_NODE_ID,
            domain_name=domain_name,
            zone_name=zone_name,
            zone_id=self.zone_id,
        )


class Route53ZoneResolver:
    """
    Looks up the public hosted zone authoritative for a domain in the current account.

    Route53 lists zones ordered by their reversed labels. The listing starts
    at the apex and is read only until it moves past it. The deepest zone
    that contains the domain wins: 'dev.example.org' delegated to its own zone
    beats 'example.org'. A missing zone is a fatal precondition error
    (ZoneNotFound); API errors from Route53 are raised unchanged.
    """
    def __init__(self, client: Optional[Any] = None, page_size: int = 100):
        self.client = client or boto3.client("route53")
        self.page_size = page_size

    def _zones_under(self, apex: str):
        # Every zone at or below the apex lists before this key
        past_apex = _listing_key(apex) + "/"
        params = {"DNSName": apex, "MaxItems": str(self.page_size)}
        while True:
            response = self.client.list_hosted_zones_by_name(**params)
            for zone in response.get("HostedZones", []):
                # Route53 returns zone names fully qualified
                name = zone["Name"].rstrip(".")
                if is_within(name, apex):
                    yield name, zone
                elif _listing_key(name) > past_apex:
                    return
            if not response.get("IsTruncated"):
                return
            params = {
                "DNSName": response["NextDNSName"],
                "HostedZoneId": response["NextHostedZoneId"],
                "MaxItems": str(self.page_size),
            }

    def __call__(self, domain_name: str) -> HostedZoneRef:
        apex = zone_name_for(domain_name)
        print(f"🔍 Resolving Route53 hosted zone for {domain_name} under {apex}")

        best = None
        for name, zone in self._zones_under(apex):
            if zone.get("Config", {}).get("PrivateZone"):
                continue
            if not is_within(domain_name, name):
                continue
            if best is None or len(name) > len(best[0]):
                best = (name, zone)

        if best is None:
            raise ZoneNotFound(domain_name, apex)

        zone_name, zone = best
        return HostedZoneRef(
            node_id=HOSTED_ZONE_NODE_ID,
            domain_name=domain_name,
            zone_name=zone_name,
            zone_id=zone["Id"].split("/")[-1],
        )
