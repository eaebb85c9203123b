"""core/constants.py — Fixed enumerations shared by the API and the CLI."""

from __future__ import annotations

MAX_FILE_SIZE = 50 * 1024 * 1024  # 50 MB per uploaded video

# (name, pounds) in ascending order; labels are built as "Name (N lbs)"
WEIGHT_CLASSES: list[tuple[str, int]] = [
    ("Strawweight", 115),
    ("Flyweight", 125),
    ("Bantamweight", 135),
    ("Featherweight", 145),
    ("Lightweight", 155),
    ("Welterweight", 170),
    ("Middleweight", 185),
    ("Light Heavyweight", 205),
    ("Heavyweight", 265),
]


def weight_class_label(name: str, pounds: int) -> str:
    return f"{name} ({pounds} lbs)"


WEIGHT_CLASS_LABELS: list[str] = [weight_class_label(n, lbs) for n, lbs in WEIGHT_CLASSES]
