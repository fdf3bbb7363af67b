"""Alexa for Business (JSON 1.1)."""

from __future__ import annotations

from aws_service_clients.core.client import AWSClient
from aws_service_clients.core.operation import OperationSpec
from aws_service_clients.core.protocols import JsonProtocol

_OPERATION_NAMES = (
    "ApproveSkill",
    "AssociateContactWithAddressBook",
    "AssociateDeviceWithNetworkProfile",
    "AssociateDeviceWithRoom",
    "AssociateSkillGroupWithRoom",
    "AssociateSkillWithSkillGroup",
    "AssociateSkillWithUsers",
    "CreateAddressBook",
    "CreateBusinessReportSchedule",
    "CreateConferenceProvider",
    "CreateContact",
    "CreateGatewayGroup",
    "CreateNetworkProfile",
    "CreateProfile",
    "CreateRoom",
    "CreateSkillGroup",
    "CreateUser",
    "DeleteAddressBook",
    "DeleteBusinessReportSchedule",
    "DeleteConferenceProvider",
    "DeleteContact",
    "DeleteDevice",
    "DeleteDeviceUsageData",
    "DeleteGatewayGroup",
    "DeleteNetworkProfile",
    "DeleteProfile",
    "DeleteRoom",
    "DeleteRoomSkillParameter",
    "DeleteSkillAuthorization",
    "DeleteSkillGroup",
    "DeleteUser",
    "DisassociateContactFromAddressBook",
    "DisassociateDeviceFromRoom",
    "DisassociateSkillFromSkillGroup",
    "DisassociateSkillFromUsers",
    "DisassociateSkillGroupFromRoom",
    "ForgetSmartHomeAppliances",
    "GetAddressBook",
    "GetConferencePreference",
    "GetConferenceProvider",
    "GetContact",
    "GetDevice",
    "GetGateway",
    "GetGatewayGroup",
    "GetInvitationConfiguration",
    "GetNetworkProfile",
    "GetProfile",
    "GetRoom",
    "GetRoomSkillParameter",
    "GetSkillGroup",
    "ListBusinessReportSchedules",
    "ListConferenceProviders",
    "ListDeviceEvents",
    "ListGatewayGroups",
    "ListGateways",
    "ListSkills",
    "ListSkillsStoreCategories",
    "ListSkillsStoreSkillsByCategory",
    "ListSmartHomeAppliances",
    "ListTags",
    "PutConferencePreference",
    "PutInvitationConfiguration",
    "PutRoomSkillParameter",
    "PutSkillAuthorization",
    "RegisterAVSDevice",
    "RejectSkill",
    "ResolveRoom",
    "RevokeInvitation",
    "SearchAddressBooks",
    "SearchContacts",
    "SearchDevices",
    "SearchNetworkProfiles",
    "SearchProfiles",
    "SearchRooms",
    "SearchSkillGroups",
    "SearchUsers",
    "SendAnnouncement",
    "SendInvitation",
    "StartDeviceSync",
    "StartSmartHomeApplianceDiscovery",
    "TagResource",
    "UntagResource",
    "UpdateAddressBook",
    "UpdateBusinessReportSchedule",
    "UpdateConferenceProvider",
    "UpdateContact",
    "UpdateDevice",
    "UpdateGateway",
    "UpdateGatewayGroup",
    "UpdateNetworkProfile",
    "UpdateProfile",
    "UpdateRoom",
    "UpdateSkillGroup",
)

_OPERATIONS = tuple(OperationSpec(name) for name in _OPERATION_NAMES)


class AlexaForBusinessClient(AWSClient):
    SERVICE_NAME = "a4b"
    ENDPOINT_PREFIX = "a4b"
    SERVICE_CLIENT_NAME = "AlexaForBusiness"
    API_VERSION = "2017-11-09"
    PROTOCOL = JsonProtocol("AlexaForBusiness", json_version="1.1")
    OPERATIONS = _OPERATIONS
