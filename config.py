import os
from typing import Optional
from dotenv import load_dotenv
from aws_cdk import RemovalPolicy

# Load environment variables from a .env file
load_dotenv()

class EnvConfig:
    """
    Stores environment-specific configuration for the CDK stacks.
    """
    def __init__(
        self,
        env_name: str,
        account: str,
        region: str,
        domain: str,
        hosted_zone_id: Optional[str] = None,
        hosted_zone_name: Optional[str] = None
    ):
        self.name = env_name
        self.account = account
        self.region = region
        self.domain_name = domain
        self.hosted_zone_id = hosted_zone_id
        self.hosted_zone_name = hosted_zone_name

        # Data Lifecycle Policy:
        # In 'prod', we retain the site bucket and disable auto-delete.
        # In other environments, 'cdk destroy' removes everything.
        if env_name == 'prod':
            self.removal_policy = RemovalPolicy.RETAIN
            self.auto_delete_objects = False
        else:
            self.removal_policy = RemovalPolicy.DESTROY
            self.auto_delete_objects = True

def get_required_env(key: str) -> str:
    """
    Retrieves a required environment variable or raises a RuntimeError if missing.
    """
    value = os.getenv(key)
    if not value:
        raise RuntimeError(f"❌ MISSING CONFIG: Required environment variable '{key}' not found in .env")
    return value

def get_config(scope) -> EnvConfig:
    """
    Factory function to generate the EnvConfig object based on CDK context.
    Usage: cdk deploy -c env=prod
    """
    # Default to 'dev' environment if no context is provided
    env_name = scope.node.try_get_context("env") or "dev"
    prefix = env_name.upper()

    print(f"🔍 Initializing CDK Infrastructure for environment: {prefix}")

    # Load Mandatory Variables
    account = get_required_env(f"{prefix}_ACCOUNT")
    region = get_required_env(f"{prefix}_REGION")
    domain = get_required_env(f"{prefix}_DOMAIN_NAME")

    # Load Optional Variables
    # When set, the Route53 lookup is skipped
    hosted_zone_id = os.getenv(f"{prefix}_HOSTED_ZONE_ID")
    # Only needed when the domain is delegated to its own sub-zone
    hosted_zone_name = os.getenv(f"{prefix}_HOSTED_ZONE_NAME")

    return EnvConfig(
        env_name=env_name,
        account=account,
        region=region,
        domain=domain,
        hosted_zone_id=hosted_zone_id,
        hosted_zone_name=hosted_zone_name
    )
