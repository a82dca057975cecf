"""
AWS Adapters Package

Architectural Intent:
- One ResourceProviderPort implementation per AWS service shown in the menu
- All share AWSResourceProvider for client setup, pagination and
  sub-request isolation
"""

from cirrus.infrastructure.adapters.aws.base import AWSResourceProvider, create_session
from cirrus.infrastructure.adapters.aws.cloudfront import CloudFrontProvider
from cirrus.infrastructure.adapters.aws.dynamodb import DynamoDBProvider
from cirrus.infrastructure.adapters.aws.ec2 import EC2Provider
from cirrus.infrastructure.adapters.aws.lambda_functions import LambdaProvider
from cirrus.infrastructure.adapters.aws.rds import RDSProvider
from cirrus.infrastructure.adapters.aws.s3 import S3Provider
from cirrus.infrastructure.adapters.aws.sns import SNSProvider
from cirrus.infrastructure.adapters.aws.sqs import SQSProvider
from cirrus.infrastructure.adapters.aws.vpc import VPCProvider

__all__ = [
    "AWSResourceProvider",
    "CloudFrontProvider",
    "DynamoDBProvider",
    "EC2Provider",
    "LambdaProvider",
    "RDSProvider",
    "S3Provider",
    "SNSProvider",
    "SQSProvider",
    "VPCProvider",
    "create_session",
]
