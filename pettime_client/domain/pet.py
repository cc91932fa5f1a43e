"""
Pet Domain Model - Pets, their derived statistics and reference catalogs.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pettime_client.domain.timestamps import format_timestamp, parse_timestamp, utcnow

XP_PER_LEVEL_STEP = 100


class Mood(Enum):
    """Pet moods. Unknown server values degrade to DEFAULT."""
    HAPPY = "happy"
    CONTENT = "content"
    TIRED = "tired"
    SAD = "sad"
    BORED = "bored"

    @classmethod
    def parse(cls, value: Any) -> "Mood":
        try:
            return cls(value)
        except ValueError:
            return DEFAULT_MOOD


DEFAULT_MOOD = Mood.CONTENT


def calculate_level(xp: int) -> int:
    """
    Level reached with the given XP.

    Level n starts at (n - 1)^2 * 100 XP:
    level 1 is 0-99, level 2 is 100-399, level 3 is 400-899, ...
    """
    level = 1
    while xp >= xp_for_level(level + 1):
        level += 1
    return level


def xp_for_level(level: int) -> int:
    """XP needed to reach a level."""
    if level <= 1:
        return 0
    return (level - 1) * (level - 1) * XP_PER_LEVEL_STEP


def xp_to_next_level(xp: int) -> int:
    return xp_for_level(calculate_level(xp) + 1) - xp


def level_progress(xp: int) -> float:
    """Fraction of the current level already earned, in [0, 1]."""
    level = calculate_level(xp)
    floor = xp_for_level(level)
    ceiling = xp_for_level(level + 1)
    if ceiling <= floor:
        return 0.0
    return min(1.0, max(0.0, (xp - floor) / (ceiling - floor)))


def mood_for_inactivity(
    last_activity_at: Optional[datetime],
    now: Optional[datetime] = None,
) -> Mood:
    """
    Mood the server assigns after a period without activity.

    Args:
        last_activity_at: Last recorded activity, None if the pet never played
        now: Reference instant (default now)

    Returns:
        happy under 6h, content under 12h, tired under 24h, sad under 48h,
        bored otherwise
    """
    if last_activity_at is None:
        return Mood.BORED

    hours = ((now or utcnow()) - last_activity_at).total_seconds() / 3600
    if hours < 6:
        return Mood.HAPPY
    if hours < 12:
        return Mood.CONTENT
    if hours < 24:
        return Mood.TIRED
    if hours < 48:
        return Mood.SAD
    return Mood.BORED


@dataclass(frozen=True)
class PetType:
    """Pet type catalog entry. config is an opaque JSON tree."""
    id: str
    name: str
    icon: Optional[str] = None
    config: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PetType":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            icon=data.get("icon"),
            config=data.get("config"),
        )


@dataclass(frozen=True)
class GameType:
    """Game type catalog entry. xp_config is an opaque JSON tree."""
    id: str
    name: str
    description: Optional[str] = None
    icon: Optional[str] = None
    xp_config: Any = None
    supported_pet_types: List[str] = field(default_factory=list)
    enabled: bool = True

    def supports(self, pet_type_id: str) -> bool:
        return pet_type_id in self.supported_pet_types

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameType":
        return cls(
            id=str(data["id"]),
            name=data["name"],
            description=data.get("description"),
            icon=data.get("icon"),
            xp_config=data.get("xp_config"),
            supported_pet_types=list(data.get("supported_pet_types") or []),
            enabled=data.get("enabled", True),
        )


@dataclass(frozen=True)
class Pet:
    """
    Pet entity - one user-owned tracked subject.

    Domain rules:
    - id is server-assigned and is the only key used to match pets
    - total_xp and level are never negative
    - level never decreases as XP grows
    """
    id: str
    user_id: str
    pet_type_id: str
    name: str
    created_at: datetime
    updated_at: datetime
    pet_type: Optional[PetType] = None
    breed: Optional[str] = None
    avatar_url: Optional[str] = None
    birth_date: Optional[datetime] = None
    total_xp: int = 0
    level: int = 1
    mood: Mood = DEFAULT_MOOD
    streak_days: int = 0
    last_activity_at: Optional[datetime] = None

    @property
    def xp_to_next_level(self) -> int:
        return xp_to_next_level(self.total_xp)

    @property
    def level_progress(self) -> float:
        return level_progress(self.total_xp)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict."""
        return {
            "id": self.id,
            "user_id": self.user_id,
            "pet_type_id": self.pet_type_id,
            "name": self.name,
            "breed": self.breed,
            "avatar_url": self.avatar_url,
            "birth_date": format_timestamp(self.birth_date),
            "total_xp": self.total_xp,
            "level": self.level,
            "mood": self.mood.value,
            "streak_days": self.streak_days,
            "last_activity_at": format_timestamp(self.last_activity_at),
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pet":
        """Deserialize from an API payload."""
        total_xp = max(0, int(data.get("total_xp") or 0))
        level = data.get("level")
        pet_type = data.get("pet_type")
        return cls(
            id=str(data["id"]),
            user_id=str(data.get("user_id", "")),
            pet_type_id=str(data["pet_type_id"]),
            name=data["name"],
            created_at=parse_timestamp(data.get("created_at")) or utcnow(),
            updated_at=parse_timestamp(data.get("updated_at")) or utcnow(),
            pet_type=PetType.from_dict(pet_type) if pet_type else None,
            breed=data.get("breed"),
            avatar_url=data.get("avatar_url"),
            birth_date=parse_timestamp(data.get("birth_date")),
            total_xp=total_xp,
            level=max(0, int(level)) if level is not None else calculate_level(total_xp),
            mood=Mood.parse(data.get("mood")),
            streak_days=max(0, int(data.get("streak_days") or 0)),
            last_activity_at=parse_timestamp(data.get("last_activity_at")),
        )


@dataclass(frozen=True)
class PetStats:
    """Server-computed aggregate for one pet. Read-only, never persisted."""
    total_activities: int = 0
    total_duration_seconds: int = 0
    total_distance_meters: float = 0.0
    current_streak: int = 0
    longest_streak: int = 0
    xp_to_next_level: int = 0
    level_progress: float = 0.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PetStats":
        progress = float(data.get("level_progress") or 0.0)
        return cls(
            total_activities=int(data.get("total_activities") or 0),
            total_duration_seconds=int(data.get("total_duration_seconds") or 0),
            total_distance_meters=float(data.get("total_distance_meters") or 0.0),
            current_streak=int(data.get("current_streak") or 0),
            longest_streak=int(data.get("longest_streak") or 0),
            xp_to_next_level=int(data.get("xp_to_next_level") or 0),
            level_progress=min(1.0, max(0.0, progress)),
        )


@dataclass(frozen=True)
class CreatePetRequest:
    pet_type_id: str
    name: str
    breed: Optional[str] = None
    avatar_url: Optional[str] = None
    birth_date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Request body; optional fields are omitted when unset."""
        body: Dict[str, Any] = {"pet_type_id": self.pet_type_id, "name": self.name}
        for key in ("breed", "avatar_url", "birth_date"):
            value = getattr(self, key)
            if value:
                body[key] = value
        return body


@dataclass(frozen=True)
class UpdatePetRequest:
    """Partial update. Only fields that are set are sent."""
    name: Optional[str] = None
    breed: Optional[str] = None
    avatar_url: Optional[str] = None
    birth_date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            key: value
            for key, value in (
                ("name", self.name),
                ("breed", self.breed),
                ("avatar_url", self.avatar_url),
                ("birth_date", self.birth_date),
            )
            if value is not None
        }
