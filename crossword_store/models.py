"""Crossword data models"""

from datetime import date as Date
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple

from psycopg2.extras import Json


def _field(doc: Dict[str, Any], key: str, types, required: bool = False):
    """Read a key from a JSON object, checking its type"""
    if key not in doc or doc[key] is None:
        if required:
            raise ValueError(f"missing field '{key}'")
        return None

    value = doc[key]
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool) and bool not in (types if isinstance(types, tuple) else (types,)):
        raise ValueError(f"field '{key}' has invalid type bool")
    if not isinstance(value, types):
        raise ValueError(f"field '{key}' has invalid type {type(value).__name__}")
    return value


def _object(value: Any, what: str) -> Dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be an object, got {type(value).__name__}")
    return value


@dataclass
class Crossword:
    """A stored crossword row"""
    id: str
    series: str
    date: Date
    crossword_json: Dict[str, Any]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Crossword":
        """
        Build a crossword from a plain mapping

        Args:
            data: Mapping with keys id, series, date (ISO string or date) and crossword_json

        Raises:
            ValueError: If a key is missing or malformed
        """
        data = _object(data, "crossword")
        raw_date = data.get("date")
        if isinstance(raw_date, str):
            raw_date = Date.fromisoformat(raw_date)
        if not isinstance(raw_date, Date):
            raise ValueError("field 'date' must be an ISO date")

        return cls(
            id=_field(data, "id", str, required=True),
            series=_field(data, "series", str, required=True),
            date=raw_date,
            crossword_json=_field(data, "crossword_json", dict, required=True),
        )


@dataclass(frozen=True)
class CrosswordMetadata:
    """Listing view of a crossword, without the puzzle body"""
    id: str
    series: str
    date: Date

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "series": self.series, "date": self.date.isoformat()}


@dataclass(frozen=True)
class InsertableCrossword:
    """Write-side shape of a crossword, used to build an insert"""
    id: str
    series: str
    date: Date
    crossword_json: Dict[str, Any]

    @classmethod
    def from_crossword(cls, crossword: Crossword) -> "InsertableCrossword":
        return cls(
            id=crossword.id,
            series=crossword.series,
            date=crossword.date,
            crossword_json=crossword.crossword_json,
        )

    def as_row(self) -> Tuple[str, str, Date, Json]:
        """Row tuple in column order (id, series, date, crossword_json)"""
        return (self.id, self.series, self.date, Json(self.crossword_json))


# =============================================================================
# GUARDIAN CROSSWORD FORMAT
# =============================================================================
#
# Every object remembers which of its known keys it was parsed with, and keeps
# any other keys in `extra`, so to_dict() gives back the parsed document.
# Objects built in code (no recorded keys) emit their non-None fields.

def _extra(doc: Dict[str, Any], keys: Tuple[str, ...]) -> Dict[str, Any]:
    return {k: v for k, v in doc.items() if k not in keys}


def _present(doc: Dict[str, Any], keys: Tuple[str, ...]) -> Tuple[str, ...]:
    return tuple(k for k in keys if k in doc)


def _emit(values: Dict[str, Any], present: Optional[Tuple[str, ...]], extra: Dict[str, Any]) -> Dict[str, Any]:
    if present is None:
        out = {k: v for k, v in values.items() if v is not None}
    else:
        out = {k: v for k, v in values.items() if k in present}
    out.update(extra)
    return out


@dataclass
class GuardianCreator:
    name: str
    web_url: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    _present: Optional[Tuple[str, ...]] = field(default=None, repr=False, compare=False)

    KEYS = ("name", "webUrl")

    @classmethod
    def from_dict(cls, data: Any) -> "GuardianCreator":
        data = _object(data, "creator")
        return cls(
            name=_field(data, "name", str, required=True),
            web_url=_field(data, "webUrl", str),
            extra=_extra(data, cls.KEYS),
            _present=_present(data, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _emit({"name": self.name, "webUrl": self.web_url}, self._present, self.extra)


@dataclass
class GuardianPosition:
    x: int
    y: int
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("x", "y")

    @classmethod
    def from_dict(cls, data: Any) -> "GuardianPosition":
        data = _object(data, "position")
        return cls(
            x=_field(data, "x", int, required=True),
            y=_field(data, "y", int, required=True),
            extra=_extra(data, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _emit({"x": self.x, "y": self.y}, None, self.extra)


@dataclass
class GuardianDimensions:
    cols: int
    rows: int
    extra: Dict[str, Any] = field(default_factory=dict)

    KEYS = ("cols", "rows")

    @classmethod
    def from_dict(cls, data: Any) -> "GuardianDimensions":
        data = _object(data, "dimensions")
        return cls(
            cols=_field(data, "cols", int, required=True),
            rows=_field(data, "rows", int, required=True),
            extra=_extra(data, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        return _emit({"cols": self.cols, "rows": self.rows}, None, self.extra)


@dataclass
class GuardianEntry:
    """A single clue and its place in the grid"""
    id: str
    number: int
    human_number: str
    clue: str
    direction: str
    length: int
    position: GuardianPosition
    group: Optional[List[str]] = None
    separator_locations: Optional[Dict[str, List[int]]] = None
    solution: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    _present: Optional[Tuple[str, ...]] = field(default=None, repr=False, compare=False)

    KEYS = (
        "id", "number", "humanNumber", "clue", "direction", "length",
        "group", "position", "separatorLocations", "solution",
    )

    @classmethod
    def from_dict(cls, data: Any) -> "GuardianEntry":
        data = _object(data, "entry")
        return cls(
            id=_field(data, "id", str, required=True),
            number=_field(data, "number", int, required=True),
            human_number=_field(data, "humanNumber", str, required=True),
            clue=_field(data, "clue", str, required=True),
            direction=_field(data, "direction", str, required=True),
            length=_field(data, "length", int, required=True),
            position=GuardianPosition.from_dict(_field(data, "position", dict, required=True)),
            group=_field(data, "group", list),
            separator_locations=_field(data, "separatorLocations", dict),
            solution=_field(data, "solution", str),
            extra=_extra(data, cls.KEYS),
            _present=_present(data, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        values = {
            "id": self.id,
            "number": self.number,
            "humanNumber": self.human_number,
            "clue": self.clue,
            "direction": self.direction,
            "length": self.length,
            "group": self.group,
            "position": self.position.to_dict(),
            "separatorLocations": self.separator_locations,
            "solution": self.solution,
        }
        return _emit(values, self._present, self.extra)


@dataclass
class GuardianCrossword:
    """
    A crossword in the Guardian crossword data format

    Only `id` is required. `entries` is None when the document had no entry
    list (or an explicit null).
    """
    id: str
    number: Optional[int] = None
    name: Optional[str] = None
    creator: Optional[GuardianCreator] = None
    date: Optional[int] = None
    web_publication_date: Optional[int] = None
    entries: Optional[List[GuardianEntry]] = None
    solution_available: Optional[bool] = None
    date_solution_available: Optional[int] = None
    dimensions: Optional[GuardianDimensions] = None
    crossword_type: Optional[str] = None
    pdf: Optional[str] = None
    instructions: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    _present: Optional[Tuple[str, ...]] = field(default=None, repr=False, compare=False)

    KEYS = (
        "id", "number", "name", "creator", "date", "webPublicationDate", "entries",
        "solutionAvailable", "dateSolutionAvailable", "dimensions", "crosswordType",
        "pdf", "instructions",
    )

    @classmethod
    def from_dict(cls, doc: Any) -> "GuardianCrossword":
        """
        Parse a stored crossword document

        Raises:
            ValueError: If the document does not match the Guardian format
        """
        doc = _object(doc, "crossword document")

        creator = _field(doc, "creator", dict)
        dimensions = _field(doc, "dimensions", dict)
        entries = _field(doc, "entries", list)

        return cls(
            id=_field(doc, "id", str, required=True),
            number=_field(doc, "number", int),
            name=_field(doc, "name", str),
            creator=GuardianCreator.from_dict(creator) if creator is not None else None,
            date=_field(doc, "date", int),
            web_publication_date=_field(doc, "webPublicationDate", int),
            entries=[GuardianEntry.from_dict(e) for e in entries] if entries is not None else None,
            solution_available=_field(doc, "solutionAvailable", bool),
            date_solution_available=_field(doc, "dateSolutionAvailable", int),
            dimensions=GuardianDimensions.from_dict(dimensions) if dimensions is not None else None,
            crossword_type=_field(doc, "crosswordType", str),
            pdf=_field(doc, "pdf", str),
            instructions=_field(doc, "instructions", str),
            extra=_extra(doc, cls.KEYS),
            _present=_present(doc, cls.KEYS),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize back to the Guardian JSON document"""
        values = {
            "id": self.id,
            "number": self.number,
            "name": self.name,
            "creator": self.creator.to_dict() if self.creator else None,
            "date": self.date,
            "webPublicationDate": self.web_publication_date,
            "entries": [e.to_dict() for e in self.entries] if self.entries is not None else None,
            "solutionAvailable": self.solution_available,
            "dateSolutionAvailable": self.date_solution_available,
            "dimensions": self.dimensions.to_dict() if self.dimensions else None,
            "crosswordType": self.crossword_type,
            "pdf": self.pdf,
            "instructions": self.instructions,
        }
        return _emit(values, self._present, self.extra)
