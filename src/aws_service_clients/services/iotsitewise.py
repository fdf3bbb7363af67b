"""AWS IoT SiteWise (REST-JSON, API version 2019-12-02)."""

from __future__ import annotations

from aws_service_clients.core.client import AWSClient
from aws_service_clients.core.operation import OperationSpec
from aws_service_clients.core.protocols import RestJsonProtocol


def _op(
    name: str,
    method: str,
    uri: str,
    host_prefix: str,
    required: tuple[str, ...] = (),
    query: dict[str, str] | None = None,
) -> OperationSpec:
    return OperationSpec(
        name=name,
        http_method=method,
        uri=uri,
        host_prefix=host_prefix,
        required=required,
        query=query,
    )


_TIME_SERIES_QUERY = {"Alias": "alias", "AssetId": "assetId", "PropertyId": "propertyId"}

_OPERATIONS: tuple[OperationSpec, ...] = (
    _op("AssociateAssets", "POST", "/assets/{AssetId}/associate", "api.", ("AssetId",)),
    _op("AssociateTimeSeriesToAssetProperty", "POST", "/timeseries/associate/", "api.", ("Alias", "AssetId", "PropertyId")),
    _op("BatchAssociateProjectAssets", "POST", "/projects/{ProjectId}/assets/associate", "monitor.", ("ProjectId",)),
    _op("BatchDisassociateProjectAssets", "POST", "/projects/{ProjectId}/assets/disassociate", "monitor.", ("ProjectId",)),
    _op("BatchGetAssetPropertyAggregates", "POST", "/properties/batch/aggregates", "data."),
    _op("BatchGetAssetPropertyValue", "POST", "/properties/batch/latest", "data."),
    _op("BatchGetAssetPropertyValueHistory", "POST", "/properties/batch/history", "data."),
    _op("BatchPutAssetPropertyValue", "POST", "/properties", "data."),
    _op("CreateAccessPolicy", "POST", "/access-policies", "monitor."),
    _op("CreateAsset", "POST", "/assets", "api."),
    _op("CreateAssetModel", "POST", "/asset-models", "api."),
    _op("CreateBulkImportJob", "POST", "/jobs", "data."),
    _op("CreateDashboard", "POST", "/dashboards", "monitor."),
    _op("CreateGateway", "POST", "/20200301/gateways", "api."),
    _op("CreatePortal", "POST", "/portals", "monitor."),
    _op("CreateProject", "POST", "/projects", "monitor."),
    _op("DeleteAccessPolicy", "DELETE", "/access-policies/{AccessPolicyId}", "monitor.", ("AccessPolicyId",)),
    _op("DeleteAsset", "DELETE", "/assets/{AssetId}", "api.", ("AssetId",)),
    _op("DeleteAssetModel", "DELETE", "/asset-models/{AssetModelId}", "api.", ("AssetModelId",)),
    _op("DeleteDashboard", "DELETE", "/dashboards/{DashboardId}", "monitor.", ("DashboardId",)),
    _op("DeleteGateway", "DELETE", "/20200301/gateways/{GatewayId}", "api.", ("GatewayId",)),
    _op("DeletePortal", "DELETE", "/portals/{PortalId}", "monitor.", ("PortalId",)),
    _op("DeleteProject", "DELETE", "/projects/{ProjectId}", "monitor.", ("ProjectId",)),
    _op("DeleteTimeSeries", "POST", "/timeseries/delete/", "api.", query=_TIME_SERIES_QUERY),
    _op("DescribeAccessPolicy", "GET", "/access-policies/{AccessPolicyId}", "monitor.", ("AccessPolicyId",)),
    _op("DescribeAsset", "GET", "/assets/{AssetId}", "api.", ("AssetId",)),
    _op("DescribeAssetModel", "GET", "/asset-models/{AssetModelId}", "api.", ("AssetModelId",)),
    _op("DescribeAssetProperty", "GET", "/assets/{AssetId}/properties/{PropertyId}", "api.", ("AssetId", "PropertyId")),
    _op("DescribeBulkImportJob", "GET", "/jobs/{JobId}", "data.", ("JobId",)),
    _op("DescribeDashboard", "GET", "/dashboards/{DashboardId}", "monitor.", ("DashboardId",)),
    _op("DescribeDefaultEncryptionConfiguration", "GET", "/configuration/account/encryption", "api."),
    _op("DescribeGateway", "GET", "/20200301/gateways/{GatewayId}", "api.", ("GatewayId",)),
    _op("DescribeGatewayCapabilityConfiguration", "GET", "/20200301/gateways/{GatewayId}/capability/{CapabilityNamespace}", "api.", ("GatewayId", "CapabilityNamespace")),
    _op("DescribeLoggingOptions", "GET", "/logging", "api."),
    _op("DescribePortal", "GET", "/portals/{PortalId}", "monitor.", ("PortalId",)),
    _op("DescribeProject", "GET", "/projects/{ProjectId}", "monitor.", ("ProjectId",)),
    _op("DescribeStorageConfiguration", "GET", "/configuration/account/storage", "api."),
    _op("DescribeTimeSeries", "GET", "/timeseries/describe/", "api."),
    _op("DisassociateAssets", "POST", "/assets/{AssetId}/disassociate", "api.", ("AssetId",)),
    _op("DisassociateTimeSeriesFromAssetProperty", "POST", "/timeseries/disassociate/", "api.", ("Alias", "AssetId", "PropertyId")),
    _op("GetAssetPropertyAggregates", "GET", "/properties/aggregates", "data.", ("AggregateTypes", "Resolution", "StartDate", "EndDate")),
    _op("GetAssetPropertyValue", "GET", "/properties/latest", "data."),
    _op("GetAssetPropertyValueHistory", "GET", "/properties/history", "data."),
    _op("GetInterpolatedAssetPropertyValues", "GET", "/properties/interpolated", "data.", ("StartTimeInSeconds", "EndTimeInSeconds", "Quality", "IntervalInSeconds", "Type")),
    _op("ListAccessPolicies", "GET", "/access-policies", "monitor."),
    _op("ListAssetModelProperties", "GET", "/asset-models/{AssetModelId}/properties", "api.", ("AssetModelId",)),
    _op("ListAssetModels", "GET", "/asset-models", "api."),
    _op("ListAssetProperties", "GET", "/assets/{AssetId}/properties", "api.", ("AssetId",)),
    _op("ListAssetRelationships", "GET", "/assets/{AssetId}/assetRelationships", "api.", ("AssetId", "TraversalType")),
    _op("ListAssets", "GET", "/assets", "api."),
    _op("ListAssociatedAssets", "GET", "/assets/{AssetId}/hierarchies", "api.", ("AssetId",)),
    _op("ListBulkImportJobs", "GET", "/jobs", "data."),
    _op("ListDashboards", "GET", "/dashboards", "monitor.", ("ProjectId",)),
    _op("ListGateways", "GET", "/20200301/gateways", "api."),
    _op("ListPortals", "GET", "/portals", "monitor."),
    _op("ListProjectAssets", "GET", "/projects/{ProjectId}/assets", "monitor.", ("ProjectId",)),
    _op("ListProjects", "GET", "/projects", "monitor.", ("PortalId",)),
    _op("ListTagsForResource", "GET", "/tags", "api.", ("ResourceArn",)),
    _op("ListTimeSeries", "GET", "/timeseries/", "api."),
    _op("PutDefaultEncryptionConfiguration", "POST", "/configuration/account/encryption", "api."),
    _op("PutLoggingOptions", "PUT", "/logging", "api."),
    _op("PutStorageConfiguration", "POST", "/configuration/account/storage", "api."),
    _op("TagResource", "POST", "/tags", "api.", ("ResourceArn",)),
    _op("UntagResource", "DELETE", "/tags", "api.", ("ResourceArn", "TagKeys")),
    _op("UpdateAccessPolicy", "PUT", "/access-policies/{AccessPolicyId}", "monitor.", ("AccessPolicyId",)),
    _op("UpdateAsset", "PUT", "/assets/{AssetId}", "api.", ("AssetId",)),
    _op("UpdateAssetModel", "PUT", "/asset-models/{AssetModelId}", "api.", ("AssetModelId",)),
    _op("UpdateAssetProperty", "PUT", "/assets/{AssetId}/properties/{PropertyId}", "api.", ("AssetId", "PropertyId")),
    _op("UpdateDashboard", "PUT", "/dashboards/{DashboardId}", "monitor.", ("DashboardId",)),
    _op("UpdateGateway", "PUT", "/20200301/gateways/{GatewayId}", "api.", ("GatewayId",)),
    _op("UpdateGatewayCapabilityConfiguration", "POST", "/20200301/gateways/{GatewayId}/capability", "api.", ("GatewayId",)),
    _op("UpdatePortal", "PUT", "/portals/{PortalId}", "monitor.", ("PortalId",)),
    _op("UpdateProject", "PUT", "/projects/{ProjectId}", "monitor.", ("ProjectId",)),
)


class IoTSiteWiseClient(AWSClient):
    """Assets, asset models, gateways, portals and time series.

    Control-plane calls go to ``api.``, property data to ``data.`` and the
    SiteWise Monitor resources to ``monitor.`` host prefixes.
    """

    SERVICE_NAME = "iotsitewise"
    ENDPOINT_PREFIX = "iotsitewise"
    SERVICE_CLIENT_NAME = "IoTSiteWise"
    API_VERSION = "2019-12-02"
    PROTOCOL = RestJsonProtocol()
    OPERATIONS = _OPERATIONS
