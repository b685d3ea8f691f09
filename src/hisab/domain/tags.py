import re

from hisab.models import Tag, Transaction

HASHTAG_PATTERN = re.compile(r"#\w+", re.ASCII)


def extract_hashtags(description: str) -> list[str]:
    return HASHTAG_PATTERN.findall(description or "")


def find_new_tags(description: str, existing_tags: list[Tag]) -> list[Tag]:
    """
    Return tags for hashtags in ``description`` that are not known yet.

    Matching is case-insensitive against existing tags and against earlier
    hashtags in the same description; the first spelling seen is kept.
    """
    seen = {tag.name.lower() for tag in existing_tags}
    new_tags: list[Tag] = []
    for name in extract_hashtags(description):
        key = name.lower()
        if key in seen:
            continue
        seen.add(key)
        new_tags.append(Tag(name=name))
    return new_tags


def normalize_tag_name(raw_name: str | None) -> str:
    name = (raw_name or "").strip()
    if not name or name == "#":
        return ""
    return name if name.startswith("#") else f"#{name}"


def has_tag_named(tags: list[Tag], name: str) -> bool:
    key = name.lower()
    return any(tag.name.lower() == key for tag in tags)


def matches_tag(transaction: Transaction, tag_name: str) -> bool:
    # Substring match, so "#car" also matches "#cartoon".
    return tag_name.lower() in transaction.description.lower()
