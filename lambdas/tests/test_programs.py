"""
Tests for the add-program, get-programs and delete-program Lambda functions.
"""

import json


def body_of(response):
    return json.loads(response["body"])


class TestAddProgram:
    """Test cases for the add-program Lambda function."""

    def test_lambda_handler_success(self, dynamodb_table, add_program_module,
                                    make_event, sample_program, sample_workout):
        """Test successful program creation."""
        response = add_program_module.lambda_handler(make_event("u1", sample_program), None)

        assert response["statusCode"] == 200
        assert response["headers"]["Content-Type"] == "application/json"
        assert response["headers"]["Access-Control-Allow-Origin"] == "*"

        program = body_of(response)
        assert program["id"]
        assert program["createdBy"] == "u1"
        assert program["workouts"] == [[sample_workout]]

        # Verify item was written to DynamoDB
        item = dynamodb_table.get_item(Key={"Id": program["id"]})["Item"]
        assert item["Type"] == "program"
        assert item["Name"] == "P1"
        assert item["CreatedBy"] == "u1"
        assert item["Public"] is False

    def test_lambda_handler_missing_user(self, dynamodb_table, add_program_module,
                                         make_event, sample_program):
        """Test that a request without a UserID header is rejected."""
        response = add_program_module.lambda_handler(make_event(None, sample_program), None)

        assert response["statusCode"] == 400
        assert body_of(response) == {"status": 400, "message": "UserID header is required"}
        assert dynamodb_table.scan()["Items"] == []

    def test_lambda_handler_invalid_json(self, dynamodb_table, add_program_module, make_event):
        response = add_program_module.lambda_handler(make_event("u1", "{not json"), None)

        assert response["statusCode"] == 400
        assert body_of(response)["message"] == "Invalid request body"

    def test_lambda_handler_invalid_weeks(self, dynamodb_table, add_program_module,
                                          make_event, sample_program):
        event = make_event("u1", dict(sample_program, numWeeks=0))
        response = add_program_module.lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert body_of(response)["message"] == "numWeeks must be a number greater than 0"
        assert dynamodb_table.scan()["Items"] == []

    def test_lambda_handler_weeks_out_of_range(self, dynamodb_table, add_program_module,
                                               make_event, sample_program):
        """Test that a week count DynamoDB cannot store is a 400, not a failed write."""
        event = make_event("u1", dict(sample_program, numWeeks=10 ** 40))
        response = add_program_module.lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert body_of(response)["message"] == "numWeeks is out of range"
        assert dynamodb_table.scan()["Items"] == []

    def test_lambda_handler_workout_difficulty_not_finite(self, dynamodb_table, add_program_module,
                                                          make_event, sample_program,
                                                          sample_workout):
        workout = dict(sample_workout, difficulty_estimate=float("nan"))
        event = make_event("u1", dict(sample_program, workouts=[[workout]]))
        response = add_program_module.lambda_handler(event, None)

        assert response["statusCode"] == 400
        assert body_of(response)["message"] == \
            "workout difficulty_estimate must be a finite number"

    def test_private_name_unique_per_owner(self, dynamodb_table, add_program_module,
                                           make_event, sample_program):
        """Test that private names collide for one owner but not across owners."""
        first = add_program_module.lambda_handler(make_event("u1", sample_program), None)
        again = add_program_module.lambda_handler(make_event("u1", sample_program), None)
        other = add_program_module.lambda_handler(make_event("u2", sample_program), None)

        assert first["statusCode"] == 200
        assert again["statusCode"] == 400
        assert body_of(again)["message"] == "A program with the name P1 already exists"
        assert other["statusCode"] == 200
        assert len(dynamodb_table.scan()["Items"]) == 2

    def test_public_name_unique_across_users(self, dynamodb_table, add_program_module,
                                             make_event, sample_program):
        public_program = dict(sample_program, public=True)
        first = add_program_module.lambda_handler(make_event("u1", public_program), None)
        second = add_program_module.lambda_handler(make_event("u2", public_program), None)

        assert first["statusCode"] == 200
        assert second["statusCode"] == 400

    def test_public_name_free_when_taken_privately(self, dynamodb_table, add_program_module,
                                                   make_event, sample_program):
        """Test that a public name may reuse another user's private program name."""
        private = add_program_module.lambda_handler(make_event("u1", sample_program), None)
        public = add_program_module.lambda_handler(
            make_event("u2", dict(sample_program, public=True)), None)

        assert private["statusCode"] == 200
        assert public["statusCode"] == 200

    def test_missing_table_config(self, aws_credentials, monkeypatch, add_program_module,
                                  make_event, sample_program):
        monkeypatch.delenv("table_region", raising=False)
        monkeypatch.delenv("table_name", raising=False)
        response = add_program_module.lambda_handler(make_event("u1", sample_program), None)

        assert response["statusCode"] == 500
        assert body_of(response)["message"] == "table_region env var doesn't exist"


class TestGetPrograms:
    """Test cases for the get-programs Lambda function."""

    def add(self, module, event_factory, user_id, body):
        response = module.lambda_handler(event_factory(user_id, body), None)
        assert response["statusCode"] == 200
        return body_of(response)

    def test_round_trip(self, dynamodb_table, add_program_module, get_programs_module,
                        make_event, sample_program):
        """Test that a stored program reads back exactly as it was returned on creation."""
        created = self.add(add_program_module, make_event, "u1", sample_program)

        response = get_programs_module.lambda_handler(
            make_event("u1", path={"programId": created["id"]}), None)

        assert response["statusCode"] == 200
        assert body_of(response) == created

    def test_bare_workout_ids_come_back_as_objects(self, dynamodb_table, add_program_module,
                                                   get_programs_module, make_event,
                                                   sample_program):
        """Test that workout ids sent as strings are stored and returned as workout objects."""
        created = self.add(add_program_module, make_event, "u1",
                           dict(sample_program, workouts=[["w1", "w2"]]))

        response = get_programs_module.lambda_handler(
            make_event("u1", path={"programId": created["id"]}), None)

        program = body_of(response)
        assert program == created
        assert [w["id"] for w in program["workouts"][0]] == ["w1", "w2"]
        assert program["workouts"][0][0]["title"] == ""
        assert program["workouts"][0][0]["difficulty_estimate"] == 0.0

    def test_private_program_hidden_from_others(self, dynamodb_table, add_program_module,
                                                get_programs_module, make_event, sample_program):
        created = self.add(add_program_module, make_event, "u1", sample_program)

        response = get_programs_module.lambda_handler(
            make_event("u2", path={"programId": created["id"]}), None)

        assert response["statusCode"] == 401
        assert body_of(response)["message"] == "Unauthorized to view this program"

    def test_public_program_visible_to_others(self, dynamodb_table, add_program_module,
                                              get_programs_module, make_event, sample_program):
        created = self.add(add_program_module, make_event, "u1", dict(sample_program, public=True))

        response = get_programs_module.lambda_handler(
            make_event("u2", path={"programId": created["id"]}), None)

        assert response["statusCode"] == 200

    def test_unknown_program(self, dynamodb_table, get_programs_module, make_event):
        response = get_programs_module.lambda_handler(
            make_event("u1", path={"programId": "missing"}), None)

        assert response["statusCode"] == 400
        assert body_of(response)["message"] == "Unable to find program missing"

    def test_list_public_and_own(self, dynamodb_table, add_program_module, get_programs_module,
                                 make_event, sample_program):
        """Test that listing returns public programs plus the caller's private ones."""
        self.add(add_program_module, make_event, "u1", dict(sample_program, name="Mine"))
        self.add(add_program_module, make_event, "u2", dict(sample_program, name="Theirs"))
        self.add(add_program_module, make_event, "u2",
                 dict(sample_program, name="Shared", public=True))

        response = get_programs_module.lambda_handler(make_event("u1"), None)

        assert response["statusCode"] == 200
        assert sorted(p["name"] for p in body_of(response)) == ["Mine", "Shared"]

    def test_list_empty(self, dynamodb_table, get_programs_module, make_event):
        response = get_programs_module.lambda_handler(make_event("u1"), None)

        assert response["statusCode"] == 200
        assert body_of(response) == []

    def test_list_excludes_other_kinds(self, dynamodb_table, add_program_module,
                                       add_challenge_module, get_programs_module,
                                       make_event, sample_program, sample_challenge):
        self.add(add_program_module, make_event, "u1", sample_program)
        self.add(add_challenge_module, make_event, "u1", dict(sample_challenge, name="P1"))

        programs = body_of(get_programs_module.lambda_handler(make_event("u1"), None))

        assert len(programs) == 1
        assert "numWeeks" in programs[0]


class TestDeleteProgram:
    """Test cases for the delete-program Lambda function."""

    def test_owner_deletes(self, dynamodb_table, add_program_module, delete_program_module,
                           make_event, sample_program):
        created = body_of(add_program_module.lambda_handler(make_event("u1", sample_program), None))

        response = delete_program_module.lambda_handler(
            make_event("u1", path={"programId": created["id"]}), None)

        assert response["statusCode"] == 200
        assert body_of(response) == {"status": 200, "message": "Program deleted"}
        assert "Item" not in dynamodb_table.get_item(Key={"Id": created["id"]})

    def test_non_owner_rejected(self, dynamodb_table, add_program_module, delete_program_module,
                                make_event, sample_program):
        created = body_of(add_program_module.lambda_handler(
            make_event("u1", dict(sample_program, public=True)), None))

        response = delete_program_module.lambda_handler(
            make_event("u2", path={"programId": created["id"]}), None)

        assert response["statusCode"] == 401
        assert body_of(response)["message"] == "Must be the owner of the program to delete it"
        assert "Item" in dynamodb_table.get_item(Key={"Id": created["id"]})

    def test_missing_program(self, dynamodb_table, delete_program_module, make_event):
        response = delete_program_module.lambda_handler(
            make_event("u1", path={"programId": "nonexistent"}), None)

        assert response["statusCode"] == 400
        assert body_of(response)["message"] == "The program doesn't exist"

    def test_missing_path_parameter(self, dynamodb_table, delete_program_module, make_event):
        response = delete_program_module.lambda_handler(make_event("u1"), None)

        assert response["statusCode"] == 400
        assert body_of(response)["message"] == "Path parameter programId is required"


class TestProgramScenario:
    """End-to-end walk through creating, reading and deleting a private program."""

    def test_scenario(self, dynamodb_table, add_program_module, get_programs_module,
                      delete_program_module, make_event, sample_program):
        created = add_program_module.lambda_handler(make_event("u1", sample_program), None)
        assert created["statusCode"] == 200
        program_id = body_of(created)["id"]

        duplicate = add_program_module.lambda_handler(make_event("u1", sample_program), None)
        assert duplicate["statusCode"] == 400

        by_other = add_program_module.lambda_handler(make_event("u2", sample_program), None)
        assert by_other["statusCode"] == 200

        peek = get_programs_module.lambda_handler(
            make_event("u2", path={"programId": program_id}), None)
        assert peek["statusCode"] == 401

        deleted = delete_program_module.lambda_handler(
            make_event("u1", path={"programId": program_id}), None)
        assert deleted["statusCode"] == 200

        again = delete_program_module.lambda_handler(
            make_event("u1", path={"programId": program_id}), None)
        assert again["statusCode"] == 400
