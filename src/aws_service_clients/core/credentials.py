"""Credentials sources used by the SigV4 signer."""

from __future__ import annotations

import logging
import threading
from typing import Any, Protocol

import boto3
from botocore.credentials import Credentials, ReadOnlyCredentials

logger = logging.getLogger(__name__)


class CredentialsProvider(Protocol):
    def get_credentials(self) -> Credentials | None: ...


class StaticCredentialsProvider:
    """Fixed access key, secret key and optional session token."""

    def __init__(self, credentials: Credentials) -> None:
        self._credentials = credentials

    @classmethod
    def from_keys(
        cls,
        access_key_id: str,
        secret_access_key: str,
        session_token: str | None = None,
    ) -> StaticCredentialsProvider:
        return cls(Credentials(access_key_id, secret_access_key, session_token))

    def get_credentials(self) -> Credentials | None:
        return self._credentials

    def __repr__(self) -> str:
        return f"StaticCredentialsProvider(access_key_id={self._credentials.access_key[:8]}***)"


class DefaultCredentialsProviderChain:
    """Environment, shared config, SSO, container and instance credentials.

    Delegates to the boto3 session chain. The resolved credentials object is
    cached; refreshable credentials refresh themselves when frozen.
    """

    def __init__(self, profile: str | None = None) -> None:
        self._profile = profile
        self._credentials: Any = None
        self._lock = threading.Lock()

    def get_credentials(self) -> Credentials | None:
        if self._credentials is not None:
            return self._credentials

        with self._lock:
            if self._credentials is not None:
                return self._credentials

            session = boto3.Session(profile_name=self._profile)
            self._credentials = session.get_credentials()
            if self._credentials is None:
                logger.warning(
                    "No AWS credentials found in the default chain (profile=%s)",
                    self._profile,
                )
            else:
                logger.debug("Resolved credentials via %s", self._credentials.method)
            return self._credentials


def freeze(provider: CredentialsProvider) -> ReadOnlyCredentials | None:
    credentials = provider.get_credentials()
    if credentials is None:
        return None
    return credentials.get_frozen_credentials()
