from __future__ import annotations

import datetime
import json
from urllib.parse import parse_qsl, urlsplit

import pytest
from botocore.exceptions import ParamValidationError

from aws_service_clients.core.endpoint import Endpoint
from aws_service_clients.core.http import HttpResponse
from aws_service_clients.core.operation import OperationSpec
from aws_service_clients.core.protocols import JsonProtocol, QueryProtocol, RestJsonProtocol

ENDPOINT_URL = "https://api.iotsitewise.us-east-1.amazonaws.com/assets/a1"


def test_rest_json_get_sends_members_in_query():
    spec = OperationSpec("ListAssetRelationships", "GET", "/assets/{AssetId}/assetRelationships",
                         required=("AssetId", "TraversalType"))
    request = {"AssetId": "a1", "TraversalType": "PATH_TO_ROOT", "MaxResults": 10}

    http_request = RestJsonProtocol().serialize(spec, request, Endpoint(ENDPOINT_URL))

    assert http_request.method == "GET"
    assert http_request.body == b""
    assert "Content-Type" not in http_request.headers
    query = dict(parse_qsl(urlsplit(http_request.url).query))
    assert query == {"traversalType": "PATH_TO_ROOT", "maxResults": "10"}


def test_rest_json_post_splits_query_and_body():
    spec = OperationSpec("TagResource", "POST", "/tags", required=("ResourceArn",))
    request = {"ResourceArn": "arn:aws:iotsitewise:x", "Tags": {"team": "ops"}}

    http_request = RestJsonProtocol().serialize(spec, request, Endpoint(ENDPOINT_URL))

    assert urlsplit(http_request.url).query == "resourceArn=arn%3Aaws%3Aiotsitewise%3Ax"
    assert json.loads(http_request.body) == {"tags": {"team": "ops"}}
    assert http_request.headers["Content-Type"] == "application/json"


def test_rest_json_repeats_list_query_values():
    spec = OperationSpec("UntagResource", "DELETE", "/tags", required=("ResourceArn", "TagKeys"))

    http_request = RestJsonProtocol().serialize(
        spec, {"ResourceArn": "arn", "TagKeys": ["a", "b"]}, Endpoint(ENDPOINT_URL)
    )

    assert parse_qsl(urlsplit(http_request.url).query) == [
        ("resourceArn", "arn"),
        ("tagKeys", "a"),
        ("tagKeys", "b"),
    ]


def test_rest_json_explicit_bindings():
    spec = OperationSpec(
        "DeleteTimeSeries",
        "POST",
        "/timeseries/delete/",
        query={"Alias": "alias"},
        headers={"ClientToken": "X-Client-Token"},
    )

    http_request = RestJsonProtocol().serialize(
        spec, {"Alias": "/plant/temp", "ClientToken": "tok", "Extra": 1}, Endpoint(ENDPOINT_URL)
    )

    assert dict(parse_qsl(urlsplit(http_request.url).query)) == {"alias": "/plant/temp"}
    assert http_request.headers["X-Client-Token"] == "tok"
    assert json.loads(http_request.body) == {"extra": 1}


def test_rest_json_timestamps_in_body_are_epoch_seconds():
    spec = OperationSpec("BatchPutAssetPropertyValue", "POST", "/properties")
    when = datetime.datetime(2024, 1, 2, 3, 4, 5, tzinfo=datetime.timezone.utc)

    http_request = RestJsonProtocol().serialize(spec, {"Entries": [{"At": when}]}, Endpoint(ENDPOINT_URL))

    assert json.loads(http_request.body) == {"entries": [{"At": 1704164645}]}


def test_json_protocol_serialization():
    protocol = JsonProtocol("VoiceID", json_version="1.0")
    spec = OperationSpec("DescribeDomain")

    http_request = protocol.serialize(
        spec, {"DomainId": "d-1", "Unused": None}, Endpoint("https://voiceid.us-east-1.amazonaws.com")
    )

    assert http_request.method == "POST"
    assert http_request.url == "https://voiceid.us-east-1.amazonaws.com/"
    assert http_request.headers["X-Amz-Target"] == "VoiceID.DescribeDomain"
    assert http_request.headers["Content-Type"] == "application/x-amz-json-1.0"
    assert json.loads(http_request.body) == {"DomainId": "d-1"}


def test_json_error_from_body_type():
    response = HttpResponse(
        status_code=400,
        headers={"x-amzn-RequestId": "rid"},
        body=json.dumps(
            {"__type": "com.amazonaws.voiceid#ResourceNotFoundException", "Message": "gone"}
        ).encode(),
    )

    outcome = JsonProtocol("VoiceID").parse(OperationSpec("DescribeDomain"), response)

    assert outcome.error.exception_name == "ResourceNotFoundException"
    assert outcome.error.message == "gone"
    assert outcome.error.request_id == "rid"
    assert outcome.error.response_code == 400


def test_json_error_type_header_is_sanitized():
    response = HttpResponse(
        status_code=409,
        headers={"X-Amzn-ErrorType": "ConflictingOperationException:http://internal.amazon.com/"},
        body=b"",
    )

    outcome = RestJsonProtocol().parse(OperationSpec("CreateAsset"), response)

    assert outcome.error.exception_name == "ConflictingOperationException"
    assert outcome.error.message == "HTTP 409"


def test_json_invalid_body_is_serialization_error():
    response = HttpResponse(status_code=200, body=b"{not json")

    outcome = JsonProtocol("AlexaForBusiness").parse(OperationSpec("GetRoom"), response)

    assert outcome.error.exception_name == "SerializationException"


def test_json_empty_body_is_success():
    outcome = JsonProtocol("AlexaForBusiness").parse(
        OperationSpec("DeleteRoom"), HttpResponse(status_code=200)
    )

    assert outcome.result["ResponseMetadata"]["HTTPStatusCode"] == 200


RDS = QueryProtocol("rds", "2014-10-31")
RDS_ENDPOINT = Endpoint("https://rds.us-east-1.amazonaws.com")


def _form_keys(spec: OperationSpec, request: dict) -> list[tuple[str, str]]:
    http_request = RDS.serialize(spec, request, RDS_ENDPOINT)
    return parse_qsl(http_request.body.decode("utf-8"), keep_blank_values=True)


def _xml(operation: str, result: str) -> HttpResponse:
    body = (
        f'<{operation}Response xmlns="http://rds.amazonaws.com/doc/2014-10-31/">'
        f"<{operation}Result>{result}</{operation}Result>"
        "<ResponseMetadata><RequestId>rid-1</RequestId></ResponseMetadata>"
        f"</{operation}Response>"
    )
    return HttpResponse(status_code=200, body=body.encode("utf-8"))


def test_query_serialization_uses_shape_list_names():
    pairs = _form_keys(
        OperationSpec("CreateDBInstance"),
        {
            "DBInstanceIdentifier": "db-1",
            "DBInstanceClass": "db.t3.micro",
            "Engine": "postgres",
            "Tags": [{"Key": "env", "Value": "prod"}],
            "DBSecurityGroups": ["default"],
            "EnableIAMDatabaseAuthentication": True,
            "AllocatedStorage": 20,
            "AvailabilityZone": None,
        },
    )

    assert pairs[:2] == [("Action", "CreateDBInstance"), ("Version", "2014-10-31")]
    form = dict(pairs)
    assert form["Tags.Tag.1.Key"] == "env"
    assert form["Tags.Tag.1.Value"] == "prod"
    assert form["DBSecurityGroups.DBSecurityGroupName.1"] == "default"
    assert form["EnableIAMDatabaseAuthentication"] == "true"
    assert form["AllocatedStorage"] == "20"
    assert "AvailabilityZone" not in form


def test_query_snapshot_attribute_values_use_attribute_value_entries():
    form = dict(
        _form_keys(
            OperationSpec("ModifyDBSnapshotAttribute"),
            {
                "DBSnapshotIdentifier": "snap-1",
                "AttributeName": "restore",
                "ValuesToAdd": ["123456789012"],
                "ValuesToRemove": ["all"],
            },
        )
    )

    assert form["ValuesToAdd.AttributeValue.1"] == "123456789012"
    assert form["ValuesToRemove.AttributeValue.1"] == "all"
    assert "ValuesToAdd.member.1" not in form


def test_query_proxy_security_groups_use_member_entries():
    form = dict(
        _form_keys(
            OperationSpec("CreateDBProxyEndpoint"),
            {
                "DBProxyName": "proxy",
                "DBProxyEndpointName": "reader",
                "VpcSubnetIds": ["subnet-1"],
                "VpcSecurityGroupIds": ["sg-1"],
            },
        )
    )

    assert form["VpcSecurityGroupIds.member.1"] == "sg-1"
    assert form["VpcSubnetIds.member.1"] == "subnet-1"
    assert "VpcSecurityGroupIds.VpcSecurityGroupId.1" not in form


def test_query_empty_list_is_sent_as_empty_value():
    form = dict(_form_keys(OperationSpec("DescribeDBInstances"), {"Filters": []}))

    assert form["Filters"] == ""


def test_query_unknown_member_fails_validation():
    with pytest.raises(ParamValidationError):
        RDS.serialize(OperationSpec("DescribeDBInstances"), {"NoSuchMember": 1}, RDS_ENDPOINT)


def test_query_parse_empty_list_is_a_list():
    outcome = RDS.parse(OperationSpec("DescribeDBInstances"), _xml("DescribeDBInstances", "<DBInstances/>"))

    assert outcome.result["DBInstances"] == []
    assert outcome.result["ResponseMetadata"]["RequestId"] == "rid-1"


def test_query_parse_single_entry_list_is_a_list():
    outcome = RDS.parse(
        OperationSpec("DescribeDBSnapshotAttributes"),
        _xml(
            "DescribeDBSnapshotAttributes",
            "<DBSnapshotAttributesResult>"
            "<DBSnapshotIdentifier>snap-1</DBSnapshotIdentifier>"
            "<DBSnapshotAttributes><DBSnapshotAttribute>"
            "<AttributeName>restore</AttributeName>"
            "<AttributeValues><AttributeValue>all</AttributeValue></AttributeValues>"
            "</DBSnapshotAttribute></DBSnapshotAttributes>"
            "</DBSnapshotAttributesResult>",
        ),
    )

    attributes = outcome.result["DBSnapshotAttributesResult"]["DBSnapshotAttributes"]
    assert attributes == [{"AttributeName": "restore", "AttributeValues": ["all"]}]


def test_query_parse_coerces_shape_types():
    outcome = RDS.parse(
        OperationSpec("DescribeDBInstances"),
        _xml(
            "DescribeDBInstances",
            "<DBInstances><DBInstance>"
            "<DBInstanceIdentifier>db-1</DBInstanceIdentifier>"
            "<AllocatedStorage>20</AllocatedStorage>"
            "<MultiAZ>false</MultiAZ>"
            "<ReadReplicaDBInstanceIdentifiers>"
            "<ReadReplicaDBInstanceIdentifier>replica-1</ReadReplicaDBInstanceIdentifier>"
            "</ReadReplicaDBInstanceIdentifiers>"
            "</DBInstance></DBInstances>",
        ),
    )

    (instance,) = outcome.result["DBInstances"]
    assert instance["AllocatedStorage"] == 20
    assert instance["MultiAZ"] is False
    assert instance["ReadReplicaDBInstanceIdentifiers"] == ["replica-1"]


def test_query_parse_malformed_error_body():
    outcome = RDS.parse(
        OperationSpec("DescribeDBInstances"), HttpResponse(status_code=503, body=b"<oops")
    )

    assert outcome.error.exception_name == "Unknown"
    assert outcome.error.message == "HTTP 503"
    assert outcome.error.retryable is True


def test_query_parse_non_xml_success_body():
    outcome = RDS.parse(OperationSpec("DescribeDBInstances"), HttpResponse(status_code=200, body=b"{}"))

    assert outcome.error.exception_name == "SerializationException"
