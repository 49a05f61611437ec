"""
Title-based hardware spec extraction.

Each field is read from the free-text product title by an ordered list of
pattern rules; the first rule that matches wins. Nothing here raises: a field
that cannot be read is simply None.

Notes:
- RAM needs 1-3 digits plus "RAM" or "DDR", storage GB needs 3-4 digits, so a
  single number in a title rarely lands in both fields. "500GB RAM" would still
  misparse; that input is unrealistic and not handled.
"""

import math
import re
from typing import Any, Callable, NamedTuple, Optional, Sequence

from pc_recommender.schemas.pc import RawListing, StorageKind, StructuredListing


class PatternRule(NamedTuple):
    name: str
    pattern: re.Pattern[str]
    render: Callable[["re.Match[str]"], Any]


class StorageSpec(NamedTuple):
    gb: Optional[int] = None
    kind: Optional[StorageKind] = None


class ExtractedSpecs(NamedTuple):
    cpu: Optional[str]
    gpu: Optional[str]
    ram_gb: Optional[int]
    storage: StorageSpec
    color: Optional[str]


def _capture(m: "re.Match[str]") -> str:
    return m.group(1)


def _prefixed(brand: str) -> Callable[["re.Match[str]"], str]:
    def render(m: "re.Match[str]") -> str:
        return f"{brand} {m.group(1)}"

    return render


def _as_int(m: "re.Match[str]") -> int:
    return int(m.group(1))


def _tb_to_gb(m: "re.Match[str]") -> Optional[int]:
    # Half-up rounding, so 1.5TB => 1536 and 0.5TB => 512
    gb = float(m.group(1)) * 1024
    if not math.isfinite(gb):
        return None
    return int(math.floor(gb + 0.5))


CPU_RULES: Sequence[PatternRule] = (
    PatternRule("intel-core", re.compile(r"\b(Intel\s+Core\s+i[3579])\b", re.IGNORECASE), _capture),
    PatternRule("amd-ryzen", re.compile(r"\b(AMD\s+Ryzen\s+[3579])\b", re.IGNORECASE), _capture),
    PatternRule("apple-silicon", re.compile(r"\b(Apple\s+M\d(?:\s+Pro|\s+Max)?)\b", re.IGNORECASE), _capture),
)

GPU_RULES: Sequence[PatternRule] = (
    PatternRule(
        "nvidia-rtx",
        re.compile(r"\b(GeForce\s+RTX\s*\d{4}(?:\s*(?:Ti|SUPER))?)\b", re.IGNORECASE),
        _prefixed("NVIDIA"),
    ),
    PatternRule(
        "nvidia-gtx",
        re.compile(r"\b(GeForce\s+GTX\s*\d{4}(?:\s*SUPER)?)\b", re.IGNORECASE),
        _prefixed("NVIDIA"),
    ),
    PatternRule(
        "amd-radeon",
        re.compile(r"\b(Radeon\s+RX\s*\d{4}(?:\s*XT)?)\b", re.IGNORECASE),
        _prefixed("AMD"),
    ),
    PatternRule("intel-arc", re.compile(r"\b(Intel\s+Arc\s+A\d{3})\b", re.IGNORECASE), _capture),
)

RAM_RULES: Sequence[PatternRule] = (
    PatternRule("gb-ram", re.compile(r"\b(\d{1,3})\s*GB\s*(?:DDR[45]\s*)?RAM\b", re.IGNORECASE), _as_int),
    PatternRule("gb-ddr", re.compile(r"\b(\d{1,3})\s*GB\s*DDR[45]\b", re.IGNORECASE), _as_int),
)

STORAGE_SIZE_RULES: Sequence[PatternRule] = (
    PatternRule("tb", re.compile(r"\b(\d+(?:\.\d+)?)\s*TB\b", re.IGNORECASE), _tb_to_gb),
    PatternRule("gb", re.compile(r"\b(\d{3,4})\s*GB\b", re.IGNORECASE), _as_int),
)

_SSD_RE = re.compile(r"(nvme|ssd)", re.IGNORECASE)
_HDD_RE = re.compile(r"\bhdd\b", re.IGNORECASE)


def first_match(rules: Sequence[PatternRule], text: str) -> Optional[Any]:
    """
    First non-None rendering wins; a rule whose render gives None is skipped.
    """
    for rule in rules:
        m = rule.pattern.search(text)
        if m:
            value = rule.render(m)
            if value is not None:
                return value
    return None


def extract_cpu(title: str) -> Optional[str]:
    return first_match(CPU_RULES, title or "")


def extract_gpu(title: str) -> Optional[str]:
    """
    NVIDIA and AMD cards come back brand-prefixed ("NVIDIA GeForce RTX 4070"),
    Intel Arc is returned as written ("Intel Arc A770").
    """
    return first_match(GPU_RULES, title or "")


def extract_ram_gb(title: str) -> Optional[int]:
    return first_match(RAM_RULES, title or "")


def extract_storage(title: str) -> StorageSpec:
    """
    Size from "2TB" (x1024) or a 3-4 digit "512GB"; kind from nvme/ssd or hdd.
    Without a size, the kind is dropped too.
    """
    text = title or ""
    gb = first_match(STORAGE_SIZE_RULES, text)
    if not gb:
        return StorageSpec()

    if _SSD_RE.search(text):
        kind = StorageKind.SSD
    elif _HDD_RE.search(text):
        kind = StorageKind.HDD
    else:
        kind = StorageKind.UNKNOWN
    return StorageSpec(gb=gb, kind=kind)


def infer_color(title: str) -> Optional[str]:
    t = (title or "").lower()
    if "white" in t:
        return "white"
    if "silver" in t or "gray" in t or "grey" in t:
        return "silver"
    if "black" in t:
        return "black"
    return None


def extract_specs(title: str) -> ExtractedSpecs:
    return ExtractedSpecs(
        cpu=extract_cpu(title),
        gpu=extract_gpu(title),
        ram_gb=extract_ram_gb(title),
        storage=extract_storage(title),
        color=infer_color(title),
    )


def parse_listing(raw: RawListing) -> Optional[StructuredListing]:
    """
    RawListing -> StructuredListing, or None when title, url, price, CPU or RAM
    can't be established.
    """
    price = raw.price
    if price is None or not math.isfinite(price) or price <= 0:
        return None
    if not raw.title or not raw.url:
        return None

    specs = extract_specs(raw.title)
    if not specs.cpu or not specs.ram_gb:
        return None

    return StructuredListing(
        id=raw.url,
        title=raw.title,
        url=raw.url,
        price=price,
        cpu=specs.cpu,
        gpu=specs.gpu,
        ram_gb=specs.ram_gb,
        storage_gb=specs.storage.gb,
        storage_kind=specs.storage.kind,
        image_url=raw.image_url,
        color=specs.color,
    )
