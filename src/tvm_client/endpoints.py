"""Token vending machine endpoints and their response shapes.

Each supported backend is a member of the closed ``Endpoint`` enumeration,
carrying the fixed path suffix appended to the configured API URL and a tag
naming the shape of the credentials returned for it.
"""

from enum import Enum
from typing import TypedDict

from .exceptions import UnknownEndpointError


class AwsS3Params(TypedDict):
    """Bucket parameters returned alongside AWS S3 credentials."""

    Bucket: str


class AwsS3Credentials(TypedDict, total=False):
    """Temporary AWS S3 credentials restricted to the ``<namespace>/`` prefix.

    The mapping can be handed to an S3 client as-is, e.g.
    ``boto3.client("s3", aws_access_key_id=creds["accessKeyId"], ...)``.
    """

    accessKeyId: str
    secretAccessKey: str
    sessionToken: str
    expiration: str
    params: AwsS3Params


class AzureBlobCredentials(TypedDict, total=False):
    """SAS URLs for a private and a public (``access=blob``) Azure container."""

    sasURLPrivate: str
    sasURLPublic: str
    expiration: str


def url_join(*parts: str) -> str:
    """Join URL path parts with single slashes.

    One leading and one trailing slash of every part are removed and empty
    parts are dropped. A leading slash on the first part is kept.
    """
    start = "/" if parts and parts[0] and parts[0].startswith("/") else ""
    stripped = [part.removeprefix("/").removesuffix("/") for part in parts if part]
    return start + "/".join(part for part in stripped if part)


class Endpoint(Enum):
    """Supported token vending machine endpoints."""

    AWS_S3 = ("aws/s3", "aws_s3")
    AZURE_BLOB = ("azure/blob", "azure_blob")

    def __init__(self, suffix: str, response_shape: str) -> None:
        self.suffix = suffix
        self.response_shape = response_shape

    @property
    def cli_name(self) -> str:
        """Name used on the command line, e.g. ``aws-s3``."""
        return self.name.lower().replace("_", "-")

    def resolve(self, api_url: str) -> str:
        """Return the fully-qualified URL of this endpoint under ``api_url``."""
        return url_join(api_url, self.suffix)

    @classmethod
    def from_name(cls, name: str) -> "Endpoint":
        """Resolve ``aws-s3``, ``aws_s3``, ``AWS_S3`` or ``aws/s3`` to a member.

        Raises:
            UnknownEndpointError: When no endpoint matches ``name``.
        """
        normalized = name.strip().upper().replace("-", "_").replace("/", "_")
        try:
            return cls[normalized]
        except KeyError:
            raise UnknownEndpointError(name) from None
