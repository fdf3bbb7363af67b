"""Amazon Relational Database Service (Query protocol, API version 2014-10-31).

Besides the generated operations the client provides two presigning helpers:
:meth:`RDSClient.convert_request_to_presigned_url` and
:meth:`RDSClient.generate_connect_auth_token` for IAM database
authentication. Operations that copy or replicate across regions accept a
``SourceRegion`` member; when no ``PreSignedUrl`` is given the client builds
one signed for the source region.
"""

from __future__ import annotations

from botocore.exceptions import NoCredentialsError, ParamValidationError

from aws_service_clients.core.client import AWSClient
from aws_service_clients.core.endpoint import Endpoint
from aws_service_clients.core.errors import AWSError, CoreErrors
from aws_service_clients.core.operation import OperationSpec, ServiceRequest, is_set
from aws_service_clients.core.outcome import Outcome
from aws_service_clients.core.protocols import QueryProtocol
from aws_service_clients.core.signer import DEFAULT_PRESIGN_EXPIRES

AUTH_TOKEN_EXPIRES = 900
AUTH_TOKEN_SIGNING_NAME = "rds-db"

CROSS_REGION_OPERATIONS = frozenset(
    {
        "CopyDBClusterSnapshot",
        "CopyDBSnapshot",
        "CreateDBCluster",
        "CreateDBInstanceReadReplica",
        "StartDBInstanceAutomatedBackupsReplication",
    }
)

_OPERATION_NAMES = (
    "AddRoleToDBCluster",
    "AddRoleToDBInstance",
    "AddSourceIdentifierToSubscription",
    "AddTagsToResource",
    "ApplyPendingMaintenanceAction",
    "AuthorizeDBSecurityGroupIngress",
    "BacktrackDBCluster",
    "CancelExportTask",
    "CopyDBClusterParameterGroup",
    "CopyDBClusterSnapshot",
    "CopyDBParameterGroup",
    "CopyDBSnapshot",
    "CopyOptionGroup",
    "CreateCustomDBEngineVersion",
    "CreateDBCluster",
    "CreateDBClusterEndpoint",
    "CreateDBClusterParameterGroup",
    "CreateDBClusterSnapshot",
    "CreateDBInstance",
    "CreateDBInstanceReadReplica",
    "CreateDBParameterGroup",
    "CreateDBProxy",
    "CreateDBProxyEndpoint",
    "CreateDBSecurityGroup",
    "CreateDBSnapshot",
    "CreateDBSubnetGroup",
    "CreateEventSubscription",
    "CreateGlobalCluster",
    "CreateOptionGroup",
    "DeleteCustomDBEngineVersion",
    "DeleteDBCluster",
    "DeleteDBClusterEndpoint",
    "DeleteDBClusterParameterGroup",
    "DeleteDBClusterSnapshot",
    "DeleteDBInstance",
    "DeleteDBInstanceAutomatedBackup",
    "DeleteDBParameterGroup",
    "DeleteDBProxy",
    "DeleteDBProxyEndpoint",
    "DeleteDBSecurityGroup",
    "DeleteDBSnapshot",
    "DeleteDBSubnetGroup",
    "DeleteEventSubscription",
    "DeleteGlobalCluster",
    "DeleteOptionGroup",
    "DeregisterDBProxyTargets",
    "DescribeAccountAttributes",
    "DescribeCertificates",
    "DescribeDBClusterBacktracks",
    "DescribeDBClusterEndpoints",
    "DescribeDBClusterParameterGroups",
    "DescribeDBClusterParameters",
    "DescribeDBClusterSnapshotAttributes",
    "DescribeDBClusterSnapshots",
    "DescribeDBClusters",
    "DescribeDBEngineVersions",
    "DescribeDBInstanceAutomatedBackups",
    "DescribeDBInstances",
    "DescribeDBLogFiles",
    "DescribeDBParameterGroups",
    "DescribeDBParameters",
    "DescribeDBProxies",
    "DescribeDBProxyEndpoints",
    "DescribeDBProxyTargetGroups",
    "DescribeDBProxyTargets",
    "DescribeDBSecurityGroups",
    "DescribeDBSnapshotAttributes",
    "DescribeDBSnapshots",
    "DescribeDBSubnetGroups",
    "DescribeEngineDefaultClusterParameters",
    "DescribeEngineDefaultParameters",
    "DescribeEventCategories",
    "DescribeEventSubscriptions",
    "DescribeEvents",
    "DescribeExportTasks",
    "DescribeGlobalClusters",
    "DescribeOptionGroupOptions",
    "DescribeOptionGroups",
    "DescribeOrderableDBInstanceOptions",
    "DescribePendingMaintenanceActions",
    "DescribeReservedDBInstances",
    "DescribeReservedDBInstancesOfferings",
    "DescribeSourceRegions",
    "DescribeValidDBInstanceModifications",
    "DownloadDBLogFilePortion",
    "FailoverDBCluster",
    "FailoverGlobalCluster",
    "ListTagsForResource",
    "ModifyActivityStream",
    "ModifyCertificates",
    "ModifyCurrentDBClusterCapacity",
    "ModifyCustomDBEngineVersion",
    "ModifyDBCluster",
    "ModifyDBClusterEndpoint",
    "ModifyDBClusterParameterGroup",
    "ModifyDBClusterSnapshotAttribute",
    "ModifyDBInstance",
    "ModifyDBParameterGroup",
    "ModifyDBProxy",
    "ModifyDBProxyEndpoint",
    "ModifyDBProxyTargetGroup",
    "ModifyDBSnapshot",
    "ModifyDBSnapshotAttribute",
    "ModifyDBSubnetGroup",
    "ModifyEventSubscription",
    "ModifyGlobalCluster",
    "ModifyOptionGroup",
    "PromoteReadReplica",
    "PromoteReadReplicaDBCluster",
    "PurchaseReservedDBInstancesOffering",
    "RebootDBCluster",
    "RebootDBInstance",
    "RegisterDBProxyTargets",
    "RemoveFromGlobalCluster",
    "RemoveRoleFromDBCluster",
    "RemoveRoleFromDBInstance",
    "RemoveSourceIdentifierFromSubscription",
    "RemoveTagsFromResource",
    "ResetDBClusterParameterGroup",
    "ResetDBParameterGroup",
    "RestoreDBClusterFromSnapshot",
    "RestoreDBClusterToPointInTime",
    "RestoreDBInstanceFromDBSnapshot",
    "RestoreDBInstanceToPointInTime",
    "RevokeDBSecurityGroupIngress",
    "StartActivityStream",
    "StartDBCluster",
    "StartDBInstance",
    "StartDBInstanceAutomatedBackupsReplication",
    "StartExportTask",
    "StopActivityStream",
    "StopDBCluster",
    "StopDBInstance",
    "StopDBInstanceAutomatedBackupsReplication",
    "SwitchoverReadReplica",
)

_OPERATIONS = tuple(OperationSpec(name) for name in _OPERATION_NAMES)


def _root_url(endpoint: Endpoint) -> str:
    return endpoint.url if endpoint.path else endpoint.url + "/"


class RDSClient(AWSClient):
    SERVICE_NAME = "rds"
    ENDPOINT_PREFIX = "rds"
    SERVICE_CLIENT_NAME = "RDS"
    API_VERSION = "2014-10-31"
    PROTOCOL = QueryProtocol(SERVICE_NAME, API_VERSION)
    OPERATIONS = _OPERATIONS

    def _prepare_request(
        self, spec: OperationSpec, request: ServiceRequest
    ) -> Outcome[ServiceRequest]:
        if spec.name not in CROSS_REGION_OPERATIONS:
            return Outcome.success(request)

        outgoing = {member: value for member, value in request.items() if member != "SourceRegion"}
        if not is_set(request, "SourceRegion") or is_set(request, "PreSignedUrl"):
            return Outcome.success(outgoing)

        source_region = str(request["SourceRegion"])
        resolved = self._endpoint_provider.resolve_endpoint({"Region": source_region})
        if not resolved.is_success:
            self._logger.error(
                "%s: source region endpoint resolution failed: %s",
                spec.name,
                resolved.error.message,
            )
            return Outcome.failure(resolved.error)

        try:
            params = dict(self._protocol.action_parameters(spec, outgoing))
            params["DestinationRegion"] = self.region or ""
            outgoing["PreSignedUrl"] = self._signer.presign_url(
                "GET",
                _root_url(resolved.result),
                params,
                region=source_region,
                expires=DEFAULT_PRESIGN_EXPIRES,
            )
        except ParamValidationError as exc:
            self._logger.error("%s: %s", spec.name, exc)
            return Outcome.failure(AWSError.from_core(CoreErrors.VALIDATION, str(exc)))
        except NoCredentialsError as exc:
            self._logger.error("%s: %s", spec.name, exc)
            return Outcome.failure(
                AWSError.from_core(CoreErrors.MISSING_AUTHENTICATION_TOKEN, str(exc))
            )
        return Outcome.success(outgoing)

    def convert_request_to_presigned_url(
        self, operation_name: str, request: ServiceRequest, region: str
    ) -> str:
        """Presigned GET URL (one hour) for ``request`` against ``region``.

        Returns an empty string when no endpoint can be resolved, the request
        does not match the operation's input shape, or no credentials are
        available.
        """
        spec = self.operation(operation_name)
        if self._endpoint_provider is None:
            self._logger.error("Presigned URL generating failed. Endpoint provider is not initialized.")
            return ""
        resolved = self._endpoint_provider.resolve_endpoint({"Region": region})
        if not resolved.is_success:
            self._logger.error("Endpoint resolution failed: %s", resolved.error.message)
            return ""
        wire_request = {member: value for member, value in request.items() if member != "SourceRegion"}
        try:
            return self._signer.presign_url(
                "GET",
                _root_url(resolved.result),
                dict(self._protocol.action_parameters(spec, wire_request)),
                region=region,
                expires=DEFAULT_PRESIGN_EXPIRES,
            )
        except (ParamValidationError, NoCredentialsError) as exc:
            self._logger.error("Presigned URL generating failed for %s: %s", operation_name, exc)
            return ""

    def generate_connect_auth_token(
        self, db_hostname: str, db_region: str, port: int, db_user: str
    ) -> str:
        """IAM authentication token for connecting to a database as ``db_user``.

        The token is a presigned ``connect`` URL without its scheme, valid for
        15 minutes. Returns an empty string when no credentials are available.
        """
        try:
            url = self._signer.presign_url(
                "GET",
                f"https://{db_hostname}:{port}/",
                {"Action": "connect", "DBUser": db_user},
                region=db_region,
                service_name=AUTH_TOKEN_SIGNING_NAME,
                expires=AUTH_TOKEN_EXPIRES,
            )
        except NoCredentialsError as exc:
            self._logger.error("Auth token generation failed for %s: %s", db_hostname, exc)
            return ""
        return url.removeprefix("https://")
