from aws_cdk import (
    Stack,
    CfnOutput,
    Token,
    aws_certificatemanager as acm,
    aws_route53 as route53
)
from constructs import Construct

from topology.builder import Topology

class CertificateStack(Stack):
    """
    Declares the ACM certificate for the site domain, validated through DNS
    records in the existing hosted zone.
    Note: This stack MUST be deployed in the certificate's issuing region (us-east-1)
    for CloudFront compatibility.
    """
    def __init__(self, scope: Construct, construct_id: str, topology: Topology, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)

        descriptor = topology.certificate
        if not Token.is_unresolved(self.region) and self.region != descriptor.issuing_region:
            raise ValueError(
                f"CertificateStack must be deployed in {descriptor.issuing_region}, not {self.region}"
            )

        # 1. Import the existing Hosted Zone (resolved before synth, never owned)
        hosted_zone = route53.HostedZone.from_hosted_zone_attributes(self, descriptor.zone.node_id,
            hosted_zone_id=descriptor.zone.zone_id,
            zone_name=descriptor.zone.zone_name
        )

        # 2. Request Public Certificate with DNS Validation
        self.certificate = acm.Certificate(self, descriptor.node_id,
            domain_name=descriptor.domain_name,
            subject_alternative_names=list(descriptor.subject_alternative_names) or None,
            validation=acm.CertificateValidation.from_dns(hosted_zone)
        )

        CfnOutput(self, "CertificateArn", value=self.certificate.certificate_arn)
