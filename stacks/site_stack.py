from typing import Any
from aws_cdk import (
    Stack,
    CfnOutput,
    Duration,
    Token,
    aws_s3 as s3,
    aws_certificatemanager as acm,
    aws_cloudfront as cloudfront,
    aws_cloudfront_origins as origins,
    aws_route53 as route53,
    aws_route53_targets as targets,
)
from constructs import Construct

from topology.builder import Topology

class SiteStack(Stack):
    """
    Deploys the site infrastructure described by a Topology:
    1. Private, encrypted S3 bucket holding the compiled SPA.
    2. CloudFront Distribution serving the bucket over HTTPS on the custom domain.
    3. Route53 alias record mapping the domain to the distribution.

    `certificate` must be the one CertificateStack declared for the same
    topology; its construct id has to match the certificate descriptor.
    """
    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        config: Any,
        topology: Topology,
        certificate: acm.ICertificate,
        **kwargs
    ) -> None:
        expected = topology.distribution.certificate
        if certificate.node.id != expected.node_id:
            raise ValueError(
                f"SiteStack needs certificate '{expected.node_id}', got '{certificate.node.id}'"
            )
        cert_region = Stack.of(certificate).region
        if not Token.is_unresolved(cert_region) and cert_region != expected.issuing_region:
            raise ValueError(
                f"Certificate '{expected.node_id}' must come from {expected.issuing_region}, not {cert_region}"
            )

        super().__init__(scope, construct_id, **kwargs)

        # =================================================================
        # 1. ORIGIN S3 BUCKET
        # =================================================================
        # Never public: CloudFront reads it through Origin Access Control
        self.website_bucket = s3.Bucket(self, topology.origin.node_id,
            encryption=s3.BucketEncryption.S3_MANAGED,
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL,
            enforce_ssl=True,
            removal_policy=config.removal_policy,
            auto_delete_objects=config.auto_delete_objects
        )

        # =================================================================
        # 2. CLOUDFRONT DISTRIBUTION
        # =================================================================
        dist = topology.distribution

        # Client-side routes are resolved by the SPA, so missing keys serve the root document
        error_responses = [
            cloudfront.ErrorResponse(
                http_status=status,
                response_http_status=200,
                response_page_path=f"/{dist.default_root_object}",
                ttl=Duration.seconds(10)
            )
            for status in dist.fallback_statuses
        ]

        self.distribution = cloudfront.Distribution(self, dist.node_id,
            default_root_object=dist.default_root_object,
            price_class=cloudfront.PriceClass.PRICE_CLASS_100,
            certificate=certificate,
            domain_names=list(dist.domain_aliases),
            default_behavior=cloudfront.BehaviorOptions(
                origin=origins.S3BucketOrigin.with_origin_access_control(self.website_bucket),
                viewer_protocol_policy=cloudfront.ViewerProtocolPolicy.REDIRECT_TO_HTTPS,
                cache_policy=cloudfront.CachePolicy.CACHING_OPTIMIZED,
                compress=True
            ),
            error_responses=error_responses
        )

        # =================================================================
        # 3. DNS MANAGEMENT (Route53)
        # =================================================================
        record = topology.alias_record
        hosted_zone = route53.HostedZone.from_hosted_zone_attributes(self, record.zone.node_id,
            hosted_zone_id=record.zone.zone_id,
            zone_name=record.zone.zone_name
        )

        # Alias record pointing to the CloudFront Distribution
        self.alias_record = route53.ARecord(self, record.node_id,
            zone=hosted_zone,
            record_name=record.record_name,
            target=route53.RecordTarget.from_alias(targets.CloudFrontTarget(self.distribution))
        )

        # =================================================================
        # 4. OUTPUTS
        # =================================================================
        CfnOutput(self, "WebsiteBucketName", value=self.website_bucket.bucket_name,
            description="Sync the compiled SPA into this bucket")
        CfnOutput(self, "DistributionId", value=self.distribution.distribution_id)
        CfnOutput(self, "CloudFrontDomain", value=self.distribution.distribution_domain_name)
        CfnOutput(self, "SiteUrl", value=f"https://{record.record_name}")
