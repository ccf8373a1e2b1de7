from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

FACE_BASES = "URFDLB"
SLICE_BASES = "EMS"
ROTATION_BASES = "xyz"
WIDE_BASES = "urfdlb"

# Number of quarter-turn applications per modifier.
MODIFIER_POWER = {"": 1, "2": 2, "'": 3}


class AlgorithmSyntaxError(ValueError):
    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} at index {position}")
        self.position = position


class InvalidMoveToken(AlgorithmSyntaxError):
    def __init__(self, token: str, position: int) -> None:
        super().__init__(f"Invalid move token '{token}'", position)
        self.token = token


@dataclass(frozen=True)
class _Token:
    kind: str
    value: str
    start: int


def split_move(move: str) -> tuple[str, str]:
    if move.endswith("2"):
        return move[:-1], "2"
    if move.endswith("'"):
        return move[:-1], "'"
    return move, ""


def move_power(move: str) -> int:
    return MODIFIER_POWER[split_move(move)[1]]


class Notation:
    """Singmaster notation: faces, slices, wide turns, rotations and repeats."""

    _BASES = set(FACE_BASES + SLICE_BASES + ROTATION_BASES + WIDE_BASES)

    @classmethod
    def parse(cls, algorithm: str, repeat: int = 1) -> list[str]:
        if repeat < 1:
            raise ValueError("repeat must be >= 1")

        cursor = _TokenCursor(cls._tokenize(algorithm), end=len(algorithm))
        return _parse_moves(cursor, nested=False) * repeat

    @classmethod
    def normalize_move(cls, raw_move: str, position: int = 0) -> str:
        base, modifier = split_move(raw_move)
        if len(base) == 2 and base[1] in "wW" and base[0].upper() in FACE_BASES:
            return f"{base[0].lower()}{modifier}"
        if len(base) == 1 and base in cls._BASES:
            return f"{base}{modifier}"
        raise InvalidMoveToken(raw_move, position)

    @classmethod
    def invert_move(cls, move: str) -> str:
        base, modifier = split_move(cls.normalize_move(move))
        if modifier == "":
            return f"{base}'"
        if modifier == "'":
            return base
        return f"{base}2"

    @classmethod
    def invert_moves(cls, moves: Iterable[str]) -> list[str]:
        return [cls.invert_move(move) for move in reversed(list(moves))]

    @classmethod
    def invert(cls, algorithm: str) -> str:
        return format_moves(cls.invert_moves(cls.parse(algorithm)))

    @classmethod
    def _tokenize(cls, algorithm: str) -> list[_Token]:
        tokens: list[_Token] = []
        i = 0
        length = len(algorithm)

        while i < length:
            char = algorithm[i]

            if char.isspace():
                i += 1
                continue

            if char in "()^":
                kind = {"(": "LPAREN", ")": "RPAREN", "^": "CARET"}[char]
                tokens.append(_Token(kind=kind, value=char, start=i))
                i += 1
                continue

            if char.isdigit():
                start = i
                while i < length and algorithm[i].isdigit():
                    i += 1
                tokens.append(_Token(kind="INT", value=algorithm[start:i], start=start))
                continue

            # A move word runs up to the next separator and is validated whole,
            # so "R3" or "Rx" are reported as one bad token.
            start = i
            while i < length and not algorithm[i].isspace() and algorithm[i] not in "()^":
                i += 1
            word = algorithm[start:i]
            tokens.append(_Token(kind="MOVE", value=cls.normalize_move(word, start), start=start))

        return tokens


class _TokenCursor:
    def __init__(self, tokens: list[_Token], end: int) -> None:
        self._tokens = tokens
        self._index = 0
        self.end = end

    def kind(self) -> str | None:
        if self._index < len(self._tokens):
            return self._tokens[self._index].kind
        return None

    def take(self) -> _Token:
        token = self._tokens[self._index]
        self._index += 1
        return token


def _parse_moves(cursor: _TokenCursor, nested: bool) -> list[str]:
    """Moves up to the end of input, or up to the ')' closing the group when nested."""
    moves: list[str] = []
    while True:
        kind = cursor.kind()
        if kind is None:
            if nested:
                raise AlgorithmSyntaxError("Missing closing ')'", cursor.end)
            return moves

        token = cursor.take()
        if kind == "RPAREN":
            if nested:
                return moves
            raise AlgorithmSyntaxError("Unexpected ')'", token.start)
        if kind == "LPAREN":
            group = _parse_moves(cursor, nested=True)
            moves.extend(group * _repeat_suffix(cursor, bare_count=True))
        elif kind == "MOVE":
            moves.extend([token.value] * _repeat_suffix(cursor, bare_count=False))
        else:
            raise AlgorithmSyntaxError(f"Expected move or '(' but got '{token.value}'", token.start)


def _repeat_suffix(cursor: _TokenCursor, bare_count: bool) -> int:
    # "^n" may follow any move or group; a bare "n" only a group.
    kind = cursor.kind()
    if kind == "CARET":
        caret = cursor.take()
        if cursor.kind() != "INT":
            raise AlgorithmSyntaxError("Expected integer after '^'", caret.start)
    elif kind != "INT" or not bare_count:
        return 1

    token = cursor.take()
    count = int(token.value)
    if count < 1:
        raise AlgorithmSyntaxError("Repeat must be >= 1", token.start)
    return count


def parse_algorithm(algorithm: str, repeat: int = 1) -> list[str]:
    return Notation.parse(algorithm, repeat=repeat)


def invert_algorithm(algorithm: str) -> str:
    return Notation.invert(algorithm)


def format_moves(moves: Iterable[str]) -> str:
    return " ".join(moves)
