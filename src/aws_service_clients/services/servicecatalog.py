"""AWS Service Catalog (JSON 1.1)."""

from __future__ import annotations

from aws_service_clients.core.client import AWSClient
from aws_service_clients.core.operation import OperationSpec
from aws_service_clients.core.protocols import JsonProtocol

_OPERATION_NAMES = (
    "AcceptPortfolioShare",
    "AssociateBudgetWithResource",
    "AssociatePrincipalWithPortfolio",
    "AssociateProductWithPortfolio",
    "AssociateServiceActionWithProvisioningArtifact",
    "AssociateTagOptionWithResource",
    "BatchAssociateServiceActionWithProvisioningArtifact",
    "BatchDisassociateServiceActionFromProvisioningArtifact",
    "CopyProduct",
    "CreateConstraint",
    "CreatePortfolio",
    "CreatePortfolioShare",
    "CreateProduct",
    "CreateProvisionedProductPlan",
    "CreateProvisioningArtifact",
    "CreateServiceAction",
    "CreateTagOption",
    "DeleteConstraint",
    "DeletePortfolio",
    "DeletePortfolioShare",
    "DeleteProduct",
    "DeleteProvisionedProductPlan",
    "DeleteProvisioningArtifact",
    "DeleteServiceAction",
    "DeleteTagOption",
    "DescribeConstraint",
    "DescribeCopyProductStatus",
    "DescribePortfolio",
    "DescribePortfolioShareStatus",
    "DescribePortfolioShares",
    "DescribeProduct",
    "DescribeProductAsAdmin",
    "DescribeProductView",
    "DescribeProvisionedProduct",
    "DescribeProvisionedProductPlan",
    "DescribeProvisioningArtifact",
    "DescribeProvisioningParameters",
    "DescribeRecord",
    "DescribeServiceAction",
    "DescribeServiceActionExecutionParameters",
    "DescribeTagOption",
    "DisableAWSOrganizationsAccess",
    "DisassociateBudgetFromResource",
    "DisassociatePrincipalFromPortfolio",
    "DisassociateProductFromPortfolio",
    "DisassociateServiceActionFromProvisioningArtifact",
    "DisassociateTagOptionFromResource",
    "EnableAWSOrganizationsAccess",
    "ExecuteProvisionedProductPlan",
    "ExecuteProvisionedProductServiceAction",
    "GetAWSOrganizationsAccessStatus",
    "GetProvisionedProductOutputs",
    "ImportAsProvisionedProduct",
    "ListAcceptedPortfolioShares",
    "ListBudgetsForResource",
    "ListConstraintsForPortfolio",
    "ListLaunchPaths",
    "ListOrganizationPortfolioAccess",
    "ListPortfolioAccess",
    "ListPortfolios",
    "ListPortfoliosForProduct",
    "ListPrincipalsForPortfolio",
    "ListProvisionedProductPlans",
    "ListProvisioningArtifacts",
    "ListProvisioningArtifactsForServiceAction",
    "ListRecordHistory",
    "ListResourcesForTagOption",
    "ListServiceActions",
    "ListServiceActionsForProvisioningArtifact",
    "ListStackInstancesForProvisionedProduct",
    "ListTagOptions",
    "ProvisionProduct",
    "RejectPortfolioShare",
    "ScanProvisionedProducts",
    "SearchProducts",
    "SearchProductsAsAdmin",
    "SearchProvisionedProducts",
    "TerminateProvisionedProduct",
    "UpdateConstraint",
    "UpdatePortfolio",
    "UpdatePortfolioShare",
    "UpdateProduct",
    "UpdateProvisionedProduct",
    "UpdateProvisionedProductProperties",
    "UpdateProvisioningArtifact",
    "UpdateServiceAction",
    "UpdateTagOption",
)

_OPERATIONS = tuple(OperationSpec(name) for name in _OPERATION_NAMES)


class ServiceCatalogClient(AWSClient):
    SERVICE_NAME = "servicecatalog"
    ENDPOINT_PREFIX = "servicecatalog"
    SERVICE_CLIENT_NAME = "ServiceCatalog"
    API_VERSION = "2015-12-10"
    PROTOCOL = JsonProtocol("AWS242ServiceCatalogService", json_version="1.1")
    OPERATIONS = _OPERATIONS
