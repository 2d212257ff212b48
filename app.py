import aws_cdk as cdk
from config import get_config
from stacks.certificate_stack import CertificateStack
from stacks.site_stack import SiteStack
from topology.builder import build_topology
from topology.zone_resolver import Route53ZoneResolver, StaticZoneResolver

app = cdk.App()
config = get_config(app)

# =================================================================
# 1. TOPOLOGY
# =================================================================
# Resolves the hosted zone and checks every cross-resource invariant
# before any stack is defined. Errors here abort the synth.
if config.hosted_zone_id:
    resolver = StaticZoneResolver(config.hosted_zone_id, config.hosted_zone_name)
else:
    resolver = Route53ZoneResolver()

topology = build_topology(config.domain_name, resolver)
print(f"🧩 Topology for {topology.domain_name}: {' -> '.join(topology.creation_order())}")

# =================================================================
# 2. CERTIFICATE STACK (Global - us-east-1)
# =================================================================
# The region comes from the certificate descriptor, never from config.
cert_env = cdk.Environment(account=config.account, region=topology.certificate.issuing_region)
cert_stack = CertificateStack(
    app, f"SiteCert-{config.name}",
    topology=topology,
    env=cert_env,
    cross_region_references=True
)

# =================================================================
# 3. SITE STACK (Primary Region)
# =================================================================
# S3 origin, CloudFront and the Route53 alias record.
main_env = cdk.Environment(account=config.account, region=config.region)
site_stack = SiteStack(
    app, f"Site-{config.name}",
    config=config,
    topology=topology,
    certificate=cert_stack.certificate,
    env=main_env,
    cross_region_references=True
)

# =================================================================
# DEPLOYMENT DEPENDENCIES
# =================================================================

site_stack.add_dependency(cert_stack)

app.synth()
