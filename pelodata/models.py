"""
Records stored in the pelodata table and echoed back to clients.

Every record knows four representations of itself:
    from_dict / to_dict   - the camelCase JSON the client sends and receives
    from_item / to_item   - the PascalCase DynamoDB item, keyed by Id

Items of all kinds share one table, so each item also carries a Type
attribute. Nested workout structures are stored as a JSON byte payload.
"""

import json
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, ClassVar, Dict, List, Optional

from pelodata.errors import MalformedBody


def new_id() -> str:
    return str(uuid.uuid4())


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def _field(data: Dict[str, Any], key: str, expected, default):
    """Read an optional JSON field, rejecting values of the wrong type."""
    value = data.get(key)
    if value is None:
        return default
    if isinstance(value, bool) and expected is not bool:
        raise MalformedBody()
    if not isinstance(value, expected):
        raise MalformedBody()
    return value


def _float(data: Dict[str, Any], key: str) -> float:
    try:
        return float(_field(data, key, (int, float), 0.0))
    except OverflowError as e:
        raise MalformedBody() from e


def _string_list(data: Dict[str, Any], key: str) -> List[str]:
    values = _field(data, key, list, [])
    if not all(isinstance(value, str) for value in values):
        raise MalformedBody()
    return list(values)


def encode_payload(value: Any) -> bytes:
    """Serialize a nested structure deterministically so equal values compare equal."""
    return json.dumps(value, sort_keys=True, separators=(',', ':')).encode('utf-8')


def decode_payload(value: Any) -> Any:
    raw = getattr(value, 'value', value)  # boto3 wraps B attributes in Binary
    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode('utf-8')
    return json.loads(raw)


@dataclass
class Workout:
    """A Peloton class, embedded in programs and recommendations."""

    FIELDS: ClassVar[List[str]] = [
        'id', 'title', 'description', 'difficulty_estimate', 'duration',
        'image_url', 'instructor_id', 'instructor_name', 'original_air_time',
    ]

    id: str = ""
    title: str = ""
    description: str = ""
    difficulty_estimate: float = 0.0
    duration: int = 0
    image_url: str = ""
    instructor_id: str = ""
    instructor_name: str = ""
    original_air_time: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Workout":
        if not isinstance(data, dict):
            raise MalformedBody()
        return cls(
            id=_field(data, 'id', str, "").strip(),
            title=_field(data, 'title', str, ""),
            description=_field(data, 'description', str, ""),
            difficulty_estimate=_float(data, 'difficulty_estimate'),
            duration=_field(data, 'duration', int, 0),
            image_url=_field(data, 'image_url', str, ""),
            instructor_id=_field(data, 'instructor_id', str, ""),
            instructor_name=_field(data, 'instructor_name', str, ""),
            original_air_time=_field(data, 'original_air_time', int, 0),
        )

    @classmethod
    def from_reference(cls, value: Any) -> "Workout":
        """Accept either a full workout object or a bare workout id."""
        if isinstance(value, str):
            return cls(id=value.strip())
        return cls.from_dict(value)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Program:
    KIND: ClassVar[str] = "program"

    id: str = ""
    name: str = ""
    description: str = ""
    public: bool = False
    equipment_needed: List[str] = field(default_factory=list)
    num_weeks: int = 0
    workouts: List[List[Workout]] = field(default_factory=list)
    created_by: str = ""
    created_date: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Program":
        weeks = _field(data, 'workouts', list, [])
        if not all(isinstance(week, list) for week in weeks):
            raise MalformedBody()
        return cls(
            id=_field(data, 'id', str, ""),
            name=_field(data, 'name', str, "").strip(),
            description=_field(data, 'description', str, "").strip(),
            public=_field(data, 'public', bool, False),
            equipment_needed=_string_list(data, 'equipmentNeeded'),
            num_weeks=_field(data, 'numWeeks', int, 0),
            workouts=[[Workout.from_reference(w) for w in week] for week in weeks],
            created_by=_field(data, 'createdBy', str, ""),
            created_date=_field(data, 'createdDate', str, ""),
        )

    @classmethod
    def from_request(cls, body: Dict[str, Any], owner: str) -> "Program":
        program = cls.from_dict(body)
        program.id = new_id()
        program.created_by = owner
        program.created_date = utc_timestamp()
        return program

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'name': self.name,
            'description': self.description,
            'public': self.public,
            'equipmentNeeded': list(self.equipment_needed),
            'numWeeks': self.num_weeks,
            'workouts': [[w.to_dict() for w in week] for week in self.workouts],
            'createdBy': self.created_by,
            'createdDate': self.created_date,
        }

    def to_item(self) -> Dict[str, Any]:
        return {
            'Id': self.id,
            'Type': self.KIND,
            'Name': self.name,
            'Description': self.description,
            'Public': self.public,
            'EquipmentNeeded': list(self.equipment_needed),
            'NumWeeks': self.num_weeks,
            'Workouts': encode_payload([[w.to_dict() for w in week] for week in self.workouts]),
            'CreatedBy': self.created_by,
            'CreatedDate': self.created_date,
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Program":
        weeks = decode_payload(item.get('Workouts')) or []
        return cls(
            id=item.get('Id', ""),
            name=item.get('Name', ""),
            description=item.get('Description', ""),
            public=bool(item.get('Public', False)),
            equipment_needed=list(item.get('EquipmentNeeded') or []),
            num_weeks=int(item.get('NumWeeks', 0)),
            workouts=[[Workout.from_dict(w) for w in week] for week in weeks],
            created_by=item.get('CreatedBy', ""),
            created_date=item.get('CreatedDate', ""),
        )


@dataclass
class Challenge:
    KIND: ClassVar[str] = "challenge"

    id: str = ""
    created_by: str = ""
    name: str = ""
    description: str = ""
    public: bool = False
    equipment_needed: List[str] = field(default_factory=list)
    difficulty: float = 0.0
    start_date: str = ""
    end_date: str = ""
    num_workout_goal: int = 0
    workout_types: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Challenge":
        return cls(
            id=_field(data, 'id', str, ""),
            created_by=_field(data, 'createdBy', str, ""),
            name=_field(data, 'name', str, "").strip(),
            description=_field(data, 'description', str, "").strip(),
            public=_field(data, 'public', bool, False),
            equipment_needed=_string_list(data, 'equipmentNeeded'),
            difficulty=_float(data, 'difficulty'),
            start_date=_field(data, 'startDate', str, "").strip(),
            end_date=_field(data, 'endDate', str, "").strip(),
            num_workout_goal=_field(data, 'numWorkoutGoal', int, 0),
            workout_types=_string_list(data, 'workoutTypes'),
        )

    @classmethod
    def from_request(cls, body: Dict[str, Any], owner: str) -> "Challenge":
        challenge = cls.from_dict(body)
        challenge.id = new_id()
        challenge.created_by = owner
        return challenge

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'createdBy': self.created_by,
            'name': self.name,
            'description': self.description,
            'public': self.public,
            'equipmentNeeded': list(self.equipment_needed),
            'difficulty': self.difficulty,
            'startDate': self.start_date,
            'endDate': self.end_date,
            'numWorkoutGoal': self.num_workout_goal,
            'workoutTypes': list(self.workout_types),
        }

    def to_item(self) -> Dict[str, Any]:
        return {
            'Id': self.id,
            'Type': self.KIND,
            'CreatedBy': self.created_by,
            'Name': self.name,
            'Description': self.description,
            'Public': self.public,
            'EquipmentNeeded': list(self.equipment_needed),
            'Difficulty': Decimal(str(self.difficulty)),
            'StartDate': self.start_date,
            'EndDate': self.end_date,
            'NumWorkoutGoal': self.num_workout_goal,
            'WorkoutTypes': list(self.workout_types),
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Challenge":
        return cls(
            id=item.get('Id', ""),
            created_by=item.get('CreatedBy', ""),
            name=item.get('Name', ""),
            description=item.get('Description', ""),
            public=bool(item.get('Public', False)),
            equipment_needed=list(item.get('EquipmentNeeded') or []),
            difficulty=float(item.get('Difficulty', 0)),
            start_date=item.get('StartDate', ""),
            end_date=item.get('EndDate', ""),
            num_workout_goal=int(item.get('NumWorkoutGoal', 0)),
            workout_types=list(item.get('WorkoutTypes') or []),
        )


@dataclass
class Recommendation:
    KIND: ClassVar[str] = "recommendation"

    id: str = ""
    created_by: str = ""
    recommended_for: str = ""
    workout: Workout = field(default_factory=Workout)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Recommendation":
        workout: Optional[Any] = data.get('workout')
        return cls(
            id=_field(data, 'id', str, ""),
            created_by=_field(data, 'createdBy', str, ""),
            recommended_for=_field(data, 'recommendedFor', str, "").strip(),
            workout=Workout() if workout is None else Workout.from_reference(workout),
        )

    @classmethod
    def from_request(cls, body: Dict[str, Any], owner: str) -> "Recommendation":
        recommendation = cls.from_dict(body)
        recommendation.id = new_id()
        recommendation.created_by = owner
        return recommendation

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'createdBy': self.created_by,
            'recommendedFor': self.recommended_for,
            'workout': self.workout.to_dict(),
        }

    def to_item(self) -> Dict[str, Any]:
        return {
            'Id': self.id,
            'Type': self.KIND,
            'CreatedBy': self.created_by,
            'RecommendedFor': self.recommended_for,
            'Workout': encode_payload(self.workout.to_dict()),
        }

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "Recommendation":
        workout = decode_payload(item.get('Workout'))
        return cls(
            id=item.get('Id', ""),
            created_by=item.get('CreatedBy', ""),
            recommended_for=item.get('RecommendedFor', ""),
            workout=Workout.from_dict(workout) if workout else Workout(),
        )
