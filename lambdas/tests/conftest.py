"""
Shared fixtures and configurations for Lambda function tests.
"""

import json
import os
import importlib.util
from unittest.mock import patch

import boto3
import pytest
import requests
from moto import mock_aws

TABLE_NAME = "pelodata-test"
TABLE_REGION = "us-east-1"

LAMBDA_DIRS = [
    "login", "get-user-info", "get-workouts", "get-filters", "get-categories",
    "bookmark-class", "unbookmark-class",
    "add-program", "get-programs", "delete-program",
    "add-challenge", "get-challenges", "delete-challenge",
    "recommend-class", "get-recommendations", "delete-recommendation",
]


# Helper to import modules from specific Lambda directories
def import_lambda_module(lambda_dir, module_name="lambda_function"):
    """Import a module from a specific Lambda directory."""
    lambda_path = os.path.join(os.path.dirname(__file__), f"../{lambda_dir}")
    module_path = os.path.join(lambda_path, f"{module_name}.py")

    if not os.path.exists(module_path):
        return None

    spec = importlib.util.spec_from_file_location(f"{lambda_dir}.{module_name}", module_path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _lambda_fixture(lambda_dir):
    """Build a fixture that imports the given Lambda's module."""
    @pytest.fixture(name=f"{lambda_dir.replace('-', '_')}_module")
    def _fixture():
        return import_lambda_module(lambda_dir)
    return _fixture


# login_module, add_program_module, get_programs_module, ...
for _dir in LAMBDA_DIRS:
    globals()[f"{_dir.replace('-', '_')}_module"] = _lambda_fixture(_dir)


# DynamoDB fixtures
@pytest.fixture
def aws_credentials(monkeypatch):
    """Mocked AWS Credentials for boto3."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TABLE_REGION)


@pytest.fixture
def table_env(monkeypatch):
    """Point the functions at the test table."""
    monkeypatch.setenv("table_region", TABLE_REGION)
    monkeypatch.setenv("table_name", TABLE_NAME)


@pytest.fixture
def dynamodb_table(aws_credentials, table_env):
    """Create a mock DynamoDB table for testing."""
    with mock_aws():
        dynamodb = boto3.resource("dynamodb", region_name=TABLE_REGION)

        table = dynamodb.create_table(
            TableName=TABLE_NAME,
            KeySchema=[
                {"AttributeName": "Id", "KeyType": "HASH"}
            ],
            AttributeDefinitions=[
                {"AttributeName": "Id", "AttributeType": "S"}
            ],
            BillingMode="PAY_PER_REQUEST"
        )

        yield table


# Request fixtures
@pytest.fixture
def make_event():
    """Build an API Gateway proxy event."""
    def _make_event(user_id=None, body=None, path=None, query=None, headers=None):
        event_headers = dict(headers or {})
        if user_id is not None:
            event_headers["UserID"] = user_id
        event = {
            "headers": event_headers,
            "pathParameters": path,
            "queryStringParameters": query,
        }
        if body is not None:
            event["body"] = body if isinstance(body, str) else json.dumps(body)
        return event
    return _make_event


@pytest.fixture
def sample_workout():
    """A class as the Peloton archive returns it."""
    return {
        "id": "f1b7a9c2",
        "title": "20 min Climb Ride",
        "description": "Hills all the way up.",
        "difficulty_estimate": 7.8,
        "duration": 1200,
        "image_url": "https://example.com/ride.png",
        "instructor_id": "inst-1",
        "instructor_name": "Alex",
        "original_air_time": 1600000000
    }


@pytest.fixture
def sample_program(sample_workout):
    return {
        "name": "P1",
        "description": "Four weeks of climbing",
        "public": False,
        "equipmentNeeded": ["bike", "weights"],
        "numWeeks": 4,
        "workouts": [[sample_workout]]
    }


@pytest.fixture
def sample_challenge():
    return {
        "name": "Spring Century",
        "description": "Ride a hundred classes",
        "public": True,
        "equipmentNeeded": ["bike"],
        "difficulty": 6.5,
        "startDate": "2999-03-01",
        "endDate": "2999-05-31",
        "numWorkoutGoal": 100,
        "workoutTypes": ["cycling"]
    }


# Peloton fixtures
@pytest.fixture
def peloton_response():
    """Build a requests.Response as the Peloton API would send it."""
    def _peloton_response(status_code=200, payload=None, text=None, headers=None):
        response = requests.Response()
        response.status_code = status_code
        response.reason = "OK" if status_code < 400 else "Error"
        response.encoding = "utf-8"
        content = text if text is not None else ("" if payload is None else json.dumps(payload))
        response._content = content.encode("utf-8")  # pylint: disable=protected-access
        response.headers.update(headers or {})
        return response
    return _peloton_response


@pytest.fixture
def mock_peloton():
    """Patch every outgoing Peloton request."""
    with patch.object(requests.Session, "request") as mock_request:
        yield mock_request
