class TopologyError(Exception):
    """
    Base class for every error raised while assembling the deployment topology.
    Nothing raised here is retryable: each one points at a missing precondition
    or an invalid combination of resources.
    """


class ZoneNotFound(TopologyError):
    """No public hosted zone is registered for the requested domain."""

    def __init__(self, domain_name: str, zone_name: str):
        self.domain_name = domain_name
        self.zone_name = zone_name
        super().__init__(
            f"No public hosted zone authoritative for '{domain_name}' found under '{zone_name}'. "
            f"Delegate the domain to Route53 before deploying."
        )


class MissingCertificateForAlias(TopologyError):
    """A distribution declares a custom domain that no attached certificate covers."""

    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"Distribution alias '{alias}' is not covered by an attached certificate")


class RecordNameMismatch(TopologyError):
    """An alias record names a domain the distribution does not serve."""

    def __init__(self, record_name: str, aliases):
        self.record_name = record_name
        self.aliases = tuple(aliases)
        super().__init__(
            f"Record name '{record_name}' is not one of the distribution aliases {list(self.aliases)}"
        )
