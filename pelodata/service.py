"""
Create / read / list / delete for programs, challenges and recommendations.

All three kinds share one workflow, parameterized by a ResourceKind:

    extract -> validate -> uniqueness scan -> put -> respond

The uniqueness scan and the put are separate calls with no transaction
between them. Two concurrent creations of the same name can both pass the
scan and both be written.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, List, Optional, Tuple

from boto3.dynamodb.conditions import Attr, ConditionBase
from botocore.exceptions import BotoCoreError, ClientError

from pelodata.errors import (DuplicateExists, NotFound, StorageUnavailable,
                             StorageWriteFailed, Unauthorized, ValidationFailed)
from pelodata.models import Challenge, Program, Recommendation
from pelodata.store import ItemRepository
from pelodata.validation import (validate_challenge, validate_program,
                                 validate_recommendation)

logger = logging.getLogger(__name__)

STORE_ERRORS = (BotoCoreError, ClientError)


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass(frozen=True)
class ResourceKind:
    """Everything the generic workflow needs to know about one record type."""

    name: str
    path_parameter: str
    record_type: type
    validate: Callable[[Any, date], Tuple[bool, Optional[str]]]
    uniqueness_condition: Callable[[Any], ConditionBase]
    duplicate_message: Callable[[Any], str]
    visibility_condition: Callable[[str], ConditionBase]
    can_read: Callable[[Any, str], bool]
    can_delete: Callable[[Any, str], bool]
    delete_forbidden_message: str

    @property
    def plural(self) -> str:
        return f"{self.name}s"

    def type_condition(self) -> ConditionBase:
        return Attr('Type').eq(self.name)


def _name_in_scope(record) -> ConditionBase:
    # Public names are unique across everyone's public records,
    # private names only across the owner's own records.
    if record.public:
        return Attr('Name').eq(record.name) & Attr('Public').eq(True)
    return Attr('Name').eq(record.name) & Attr('CreatedBy').eq(record.created_by)


def _public_or_owned(user_id: str) -> ConditionBase:
    return Attr('Public').eq(True) | Attr('CreatedBy').eq(user_id)


def _is_participant(recommendation: Recommendation, user_id: str) -> bool:
    return user_id in (recommendation.created_by, recommendation.recommended_for)


PROGRAMS = ResourceKind(
    name=Program.KIND,
    path_parameter='programId',
    record_type=Program,
    validate=lambda program, today: validate_program(program),
    uniqueness_condition=_name_in_scope,
    duplicate_message=lambda program: f"A program with the name {program.name} already exists",
    visibility_condition=_public_or_owned,
    can_read=lambda program, user_id: program.public or program.created_by == user_id,
    can_delete=lambda program, user_id: program.created_by == user_id,
    delete_forbidden_message="Must be the owner of the program to delete it",
)

CHALLENGES = ResourceKind(
    name=Challenge.KIND,
    path_parameter='challengeId',
    record_type=Challenge,
    validate=validate_challenge,
    uniqueness_condition=_name_in_scope,
    duplicate_message=lambda challenge: f"A challenge with the name {challenge.name} already exists",
    visibility_condition=_public_or_owned,
    can_read=lambda challenge, user_id: challenge.public or challenge.created_by == user_id,
    can_delete=lambda challenge, user_id: challenge.created_by == user_id,
    delete_forbidden_message="Must be the owner of the challenge to delete it",
)

RECOMMENDATIONS = ResourceKind(
    name=Recommendation.KIND,
    path_parameter='recommendationId',
    record_type=Recommendation,
    validate=lambda recommendation, today: validate_recommendation(recommendation),
    uniqueness_condition=lambda r: (Attr('CreatedBy').eq(r.created_by)
                                    & Attr('RecommendedFor').eq(r.recommended_for)
                                    & Attr('Workout').eq(r.to_item()['Workout'])),
    duplicate_message=lambda recommendation: "That recommendation already exists",
    visibility_condition=lambda user_id: (Attr('RecommendedFor').eq(user_id)
                                          | Attr('CreatedBy').eq(user_id)),
    can_read=_is_participant,
    can_delete=_is_participant,
    delete_forbidden_message="The recommendation must be recommended by or for you to delete it",
)

RECOMMENDATION_SCOPES = {
    'forme': lambda user_id: Attr('RecommendedFor').eq(user_id),
    'byme': lambda user_id: Attr('CreatedBy').eq(user_id),
    'all': RECOMMENDATIONS.visibility_condition,
}


def recommendation_scope(rec_type: Optional[str], user_id: str) -> ConditionBase:
    """Map the ``type`` query parameter (forMe, byMe, all) to a scan predicate."""
    selector = (rec_type or '').strip().lower() or 'forme'
    if selector not in RECOMMENDATION_SCOPES:
        raise ValidationFailed("type must be forMe, byMe, or all")
    return RECOMMENDATION_SCOPES[selector](user_id)


class ResourceService:
    """Runs the shared workflows for one ResourceKind against a repository."""

    def __init__(self, kind: ResourceKind, repository: ItemRepository):
        self.kind = kind
        self.repository = repository

    def create(self, body: Dict[str, Any], user_id: str, today: Optional[date] = None):
        """
        Validate and store a new record owned by ``user_id``.

        Raises:
            MalformedBody, ValidationFailed, DuplicateExists,
            StorageUnavailable, StorageWriteFailed
        """
        record = self.kind.record_type.from_request(body, user_id)

        is_valid, error_message = self.kind.validate(record, today or utc_today())
        if not is_valid:
            raise ValidationFailed(error_message)

        self._ensure_unique(record)

        try:
            self.repository.put_new(record.to_item())
        except STORE_ERRORS as e:
            logger.error("Error saving %s %s: %s", self.kind.name, record.id, str(e))
            raise StorageWriteFailed(f"Unable to save {self.kind.name}: {e}") from e

        logger.info("Saved %s %s for user %s", self.kind.name, record.id, user_id)
        return record

    def get(self, resource_id: str, user_id: str):
        record = self._load(resource_id)
        if record is None:
            raise NotFound(f"Unable to find {self.kind.name} {resource_id}")
        if not self.kind.can_read(record, user_id):
            raise Unauthorized(f"Unauthorized to view this {self.kind.name}")
        return record

    def list(self, user_id: str, condition: Optional[ConditionBase] = None) -> List[Any]:
        """List the records visible to ``user_id``, or those matching ``condition``."""
        if condition is None:
            condition = self.kind.visibility_condition(user_id)
        items = self._scan(condition)
        logger.info("Retrieved %s %s for user %s", len(items), self.kind.plural, user_id)
        return [self.kind.record_type.from_item(item) for item in items]

    def delete(self, resource_id: str, user_id: str) -> None:
        if not resource_id:
            raise ValidationFailed(f"Path parameter {self.kind.path_parameter} is required")

        record = self._load(resource_id)
        if record is None:
            raise NotFound(f"The {self.kind.name} doesn't exist")
        if not self.kind.can_delete(record, user_id):
            raise Unauthorized(self.kind.delete_forbidden_message)

        try:
            self.repository.delete(resource_id)
        except STORE_ERRORS as e:
            logger.error("Error deleting %s %s: %s", self.kind.name, resource_id, str(e))
            raise StorageWriteFailed(f"Unable to delete {self.kind.name}: {e}") from e

        logger.info("Deleted %s %s for user %s", self.kind.name, resource_id, user_id)

    def _ensure_unique(self, record) -> None:
        conflicts = self._scan(self.kind.uniqueness_condition(record))
        if conflicts:
            logger.warning("Duplicate %s rejected for user %s", self.kind.name, record.created_by)
            raise DuplicateExists(self.kind.duplicate_message(record))

    def _scan(self, condition: ConditionBase) -> List[Dict[str, Any]]:
        try:
            return self.repository.scan(self.kind.type_condition() & condition)
        except STORE_ERRORS as e:
            logger.error("Error scanning %s: %s", self.kind.plural, str(e))
            raise StorageUnavailable(f"Unable to get existing {self.kind.plural}: {e}") from e

    def _load(self, resource_id: str):
        try:
            item = self.repository.get(resource_id)
        except STORE_ERRORS as e:
            logger.error("Error retrieving %s %s: %s", self.kind.name, resource_id, str(e))
            raise StorageUnavailable(f"Unable to get {self.kind.name}: {e}") from e
        if not item or item.get('Type') != self.kind.name:
            return None
        return self.kind.record_type.from_item(item)
