"""SigV4 request signing and presigning."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from botocore.auth import SigV4Auth, SigV4QueryAuth
from botocore.awsrequest import AWSRequest
from botocore.credentials import ReadOnlyCredentials
from botocore.exceptions import NoCredentialsError

from aws_service_clients.core.credentials import CredentialsProvider, freeze
from aws_service_clients.core.http import HttpRequest

logger = logging.getLogger(__name__)

DEFAULT_PRESIGN_EXPIRES = 3600


class SigV4Signer:
    """Signs requests for one service name and default signing region."""

    def __init__(
        self,
        credentials_provider: CredentialsProvider,
        service_name: str,
        region: str | None,
    ) -> None:
        self._credentials_provider = credentials_provider
        self.service_name = service_name
        self.region = region

    @property
    def credentials_provider(self) -> CredentialsProvider:
        return self._credentials_provider

    def _frozen_credentials(self) -> ReadOnlyCredentials:
        credentials = freeze(self._credentials_provider)
        if credentials is None:
            raise NoCredentialsError()
        return credentials

    def sign(
        self,
        request: HttpRequest,
        *,
        region: str | None = None,
        service_name: str | None = None,
    ) -> HttpRequest:
        """Return a copy of ``request`` carrying SigV4 authorization headers.

        Raises:
            NoCredentialsError: no credentials could be resolved.
        """
        aws_request = AWSRequest(
            method=request.method,
            url=request.url,
            data=request.body,
            headers=dict(request.headers),
        )
        SigV4Auth(
            self._frozen_credentials(),
            service_name or self.service_name,
            region or self.region,
        ).add_auth(aws_request)
        prepared = aws_request.prepare()
        return HttpRequest(
            method=prepared.method,
            url=prepared.url,
            headers=dict(prepared.headers.items()),
            body=request.body,
        )

    def presign_url(
        self,
        method: str,
        url: str,
        params: Mapping[str, str],
        *,
        region: str | None = None,
        service_name: str | None = None,
        expires: int = DEFAULT_PRESIGN_EXPIRES,
    ) -> str:
        """Return ``url`` with ``params`` and a SigV4 query signature.

        Raises:
            NoCredentialsError: no credentials could be resolved.
        """
        aws_request = AWSRequest(method=method, url=url, params=dict(params))
        SigV4QueryAuth(
            self._frozen_credentials(),
            service_name or self.service_name,
            region or self.region,
            expires=expires,
        ).add_auth(aws_request)
        logger.debug("Presigned %s %s (expires=%ds)", method, url, expires)
        return aws_request.url
