from __future__ import annotations

from urllib.parse import parse_qs, urlsplit
from unittest.mock import MagicMock

import pytest

from aws_service_clients.core.errors import CoreErrors
from aws_service_clients.services.rds import CROSS_REGION_OPERATIONS, RDSClient
from conftest import RecordingHttpClient, StaticEndpointProvider, xml_response

DESCRIBE_RESPONSE = """<DescribeDBInstancesResponse xmlns="http://rds.amazonaws.com/doc/2014-10-31/">
  <DescribeDBInstancesResult>
    <DBInstances>
      <DBInstance>
        <DBInstanceIdentifier>db-1</DBInstanceIdentifier>
        <Engine>postgres</Engine>
      </DBInstance>
    </DBInstances>
  </DescribeDBInstancesResult>
  <ResponseMetadata>
    <RequestId>rid-1</RequestId>
  </ResponseMetadata>
</DescribeDBInstancesResponse>"""

COPY_SNAPSHOT_RESPONSE = """<CopyDBSnapshotResponse xmlns="http://rds.amazonaws.com/doc/2014-10-31/">
  <CopyDBSnapshotResult>
    <DBSnapshot>
      <DBSnapshotIdentifier>snap-1-copy</DBSnapshotIdentifier>
    </DBSnapshot>
  </CopyDBSnapshotResult>
  <ResponseMetadata>
    <RequestId>rid-3</RequestId>
  </ResponseMetadata>
</CopyDBSnapshotResponse>"""

ERROR_RESPONSE = """<ErrorResponse xmlns="http://rds.amazonaws.com/doc/2014-10-31/">
  <Error>
    <Type>Sender</Type>
    <Code>DBInstanceNotFound</Code>
    <Message>DBInstance db-2 not found.</Message>
  </Error>
  <RequestId>rid-2</RequestId>
</ErrorResponse>"""


@pytest.fixture
def rds(configuration, credentials, http_client) -> RDSClient:
    return RDSClient(configuration=configuration, credentials=credentials, http_client=http_client)


def _form(body: bytes) -> dict[str, list[str]]:
    return parse_qs(body.decode("utf-8"), keep_blank_values=True)


def test_describe_db_instances_round_trip(configuration, credentials):
    http_client = RecordingHttpClient(xml_response(DESCRIBE_RESPONSE))
    rds = RDSClient(configuration=configuration, credentials=credentials, http_client=http_client)

    outcome = rds.describe_db_instances(
        {"Filters": [{"Name": "engine", "Values": ["postgres"]}], "MaxRecords": 20}
    )

    assert outcome.result["DBInstances"] == [
        {"DBInstanceIdentifier": "db-1", "Engine": "postgres"}
    ]
    assert outcome.result["ResponseMetadata"]["RequestId"] == "rid-1"
    sent = http_client.requests[0]
    assert sent.method == "POST"
    assert sent.url == "https://rds.us-east-1.amazonaws.com/"
    form = _form(sent.body)
    assert form["Action"] == ["DescribeDBInstances"]
    assert form["Version"] == ["2014-10-31"]
    assert form["Filters.Filter.1.Name"] == ["engine"]
    assert form["Filters.Filter.1.Values.Value.1"] == ["postgres"]
    assert form["MaxRecords"] == ["20"]


def test_service_error_is_decoded(configuration, credentials):
    http_client = RecordingHttpClient(xml_response(ERROR_RESPONSE, status_code=404))
    rds = RDSClient(configuration=configuration, credentials=credentials, http_client=http_client)

    outcome = rds.describe_db_instances({"DBInstanceIdentifier": "db-2"})

    error = outcome.error
    assert error.exception_name == "DBInstanceNotFound"
    assert error.message == "DBInstance db-2 not found."
    assert error.request_id == "rid-2"
    assert error.retryable is False
    assert len(http_client.requests) == 1


def test_cross_region_copy_gets_presigned_url(rds, http_client):
    http_client.queue(xml_response(COPY_SNAPSHOT_RESPONSE))
    request = {
        "SourceDBSnapshotIdentifier": "arn:aws:rds:us-west-2:123456789012:snapshot:snap-1",
        "TargetDBSnapshotIdentifier": "snap-1-copy",
        "SourceRegion": "us-west-2",
    }

    outcome = rds.copy_db_snapshot(request)

    assert outcome.is_success
    form = _form(http_client.requests[0].body)
    assert "SourceRegion" not in form
    presigned = form["PreSignedUrl"][0]
    parts = urlsplit(presigned)
    assert parts.netloc == "rds.us-west-2.amazonaws.com"
    query = parse_qs(parts.query)
    assert query["Action"] == ["CopyDBSnapshot"]
    assert query["DestinationRegion"] == ["us-east-1"]
    assert query["TargetDBSnapshotIdentifier"] == ["snap-1-copy"]
    assert query["X-Amz-Expires"] == ["3600"]
    assert query["X-Amz-Credential"][0].endswith("/us-west-2/rds/aws4_request")
    assert "X-Amz-Signature" in query
    assert "SourceRegion" not in query
    assert "PreSignedUrl" not in request


def test_explicit_presigned_url_is_kept(configuration, credentials, http_client):
    provider = StaticEndpointProvider("https://rds.us-east-1.amazonaws.com")
    rds = RDSClient(
        configuration=configuration,
        credentials=credentials,
        http_client=http_client,
        endpoint_provider=provider,
    )

    rds.create_db_instance_read_replica(
        {
            "DBInstanceIdentifier": "replica-1",
            "SourceDBInstanceIdentifier": "source-1",
            "SourceRegion": "us-west-2",
            "PreSignedUrl": "https://example.com/presigned",
        }
    )

    form = _form(http_client.requests[0].body)
    assert form["PreSignedUrl"] == ["https://example.com/presigned"]
    assert "SourceRegion" not in form
    assert provider.calls == [{}]


def test_source_region_resolution_failure(rds, http_client):
    outcome = rds.copy_db_cluster_snapshot(
        {
            "SourceDBClusterSnapshotIdentifier": "snap",
            "TargetDBClusterSnapshotIdentifier": "copy",
            "SourceRegion": "Not A Region",
        }
    )

    assert outcome.error.error_type is CoreErrors.ENDPOINT_RESOLUTION_FAILURE
    assert http_client.requests == []


def test_non_cross_region_operations_send_request_unchanged(rds, http_client):
    rds.describe_db_snapshots({"DBSnapshotIdentifier": "snap-1"})

    form = _form(http_client.requests[0].body)
    assert "PreSignedUrl" not in form
    assert "DescribeDBSnapshots" not in CROSS_REGION_OPERATIONS


def test_convert_request_to_presigned_url(rds):
    url = rds.convert_request_to_presigned_url(
        "DescribeDBInstances", {"DBInstanceIdentifier": "db-1"}, "eu-west-1"
    )

    assert url.startswith(
        "https://rds.eu-west-1.amazonaws.com/?Action=DescribeDBInstances"
        "&Version=2014-10-31&DBInstanceIdentifier=db-1&X-Amz-Algorithm=AWS4-HMAC-SHA256"
    )
    query = parse_qs(urlsplit(url).query)
    assert query["X-Amz-Expires"] == ["3600"]
    assert query["X-Amz-Credential"][0].endswith("/eu-west-1/rds/aws4_request")


def test_convert_request_to_presigned_url_without_provider(rds):
    rds.endpoint_provider = None

    assert rds.convert_request_to_presigned_url("DescribeDBInstances", {}, "eu-west-1") == ""


def test_convert_request_to_presigned_url_with_bad_region(rds):
    assert rds.convert_request_to_presigned_url("DescribeDBInstances", {}, "Not A Region") == ""


def test_generate_connect_auth_token(rds):
    token = rds.generate_connect_auth_token("mydb.abc.us-west-2.rds.amazonaws.com", "us-west-2", 5432, "admin")

    assert token.startswith(
        "mydb.abc.us-west-2.rds.amazonaws.com:5432/?Action=connect&DBUser=admin&"
    )
    assert "://" not in token
    query = parse_qs(urlsplit("https://" + token).query)
    assert query["X-Amz-Expires"] == ["900"]
    assert query["X-Amz-Credential"][0].endswith("/us-west-2/rds-db/aws4_request")
    assert "X-Amz-Signature" in query


def test_generated_method_names_split_acronyms():
    assert callable(RDSClient.describe_db_instances)
    assert callable(RDSClient.start_db_instance_automated_backups_replication_callable)
    assert callable(RDSClient.copy_db_cluster_snapshot_async)


def _rds_without_credentials(configuration, http_client) -> RDSClient:
    provider = MagicMock()
    provider.get_credentials.return_value = None
    return RDSClient(
        configuration=configuration, credentials_provider=provider, http_client=http_client
    )


def test_presigned_url_without_credentials_is_empty(configuration, http_client):
    rds = _rds_without_credentials(configuration, http_client)

    assert rds.convert_request_to_presigned_url("DescribeDBInstances", {}, "eu-west-1") == ""


def test_auth_token_without_credentials_is_empty(configuration, http_client):
    rds = _rds_without_credentials(configuration, http_client)

    assert rds.generate_connect_auth_token("db.example.com", "us-east-1", 3306, "admin") == ""


def test_presigned_url_with_invalid_request_is_empty(rds):
    assert rds.convert_request_to_presigned_url(
        "DescribeDBInstances", {"NoSuchMember": "x"}, "eu-west-1"
    ) == ""


def test_invalid_request_is_a_validation_failure(rds, http_client):
    outcome = rds.describe_db_instances({"MaxRecords": "twenty"})

    assert outcome.error.error_type is CoreErrors.VALIDATION
    assert http_client.requests == []


def test_snapshot_sharing_sends_attribute_value_entries(rds, http_client):
    rds.modify_db_snapshot_attribute(
        {
            "DBSnapshotIdentifier": "snap-1",
            "AttributeName": "restore",
            "ValuesToAdd": ["123456789012"],
        }
    )

    form = _form(http_client.requests[0].body)
    assert form["ValuesToAdd.AttributeValue.1"] == ["123456789012"]


def test_empty_and_single_entry_lists_in_responses(configuration, credentials):
    http_client = RecordingHttpClient(
        xml_response(
            """<DescribeDBInstancesResponse xmlns="http://rds.amazonaws.com/doc/2014-10-31/">
  <DescribeDBInstancesResult>
    <DBInstances/>
  </DescribeDBInstancesResult>
  <ResponseMetadata><RequestId>rid-4</RequestId></ResponseMetadata>
</DescribeDBInstancesResponse>"""
        )
    )
    rds = RDSClient(configuration=configuration, credentials=credentials, http_client=http_client)

    outcome = rds.describe_db_instances()

    assert outcome.result["DBInstances"] == []
