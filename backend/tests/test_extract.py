import math

from pc_recommender.pipeline.extract import (
    StorageSpec,
    extract_cpu,
    extract_gpu,
    extract_ram_gb,
    extract_specs,
    extract_storage,
    infer_color,
    parse_listing,
)
from pc_recommender.schemas.pc import RawListing, StorageKind

FULL_TITLE = (
    "CyberPowerPC Gamer Xtreme VR Gaming PC (Intel Core i5-13400F, GeForce RTX 4060 Ti, "
    "16GB DDR5 RAM, 1TB NVMe SSD, Black)"
)


def test_extract_specs_full_title():
    specs = extract_specs(FULL_TITLE)
    assert specs.cpu == "Intel Core i5"
    assert specs.gpu == "NVIDIA GeForce RTX 4060 Ti"
    assert specs.ram_gb == 16
    assert specs.storage == StorageSpec(gb=1024, kind=StorageKind.SSD)
    assert specs.color == "black"


# ── CPU ──────────────────────────────────────────────────────────────────


def test_cpu_intel_keeps_original_case():
    assert extract_cpu("desktop with intel core i7 processor") == "intel core i7"


def test_cpu_amd_ryzen():
    assert extract_cpu("Skytech Azure (AMD Ryzen 7 5700X, 32GB RAM)") == "AMD Ryzen 7"


def test_cpu_apple_silicon_variants():
    assert extract_cpu("Apple Mac mini with Apple M2 chip") == "Apple M2"
    assert extract_cpu("Mac Studio Apple M2 Pro 16GB RAM") == "Apple M2 Pro"
    assert extract_cpu("Apple M1 Max 32GB RAM") == "Apple M1 Max"


def test_cpu_intel_rule_wins_over_ryzen():
    assert extract_cpu("AMD Ryzen 9 or Intel Core i9 bundle") == "Intel Core i9"


def test_cpu_requires_brand_prefix():
    assert extract_cpu("Skytech Chronos Mini (Ryzen 5, RTX 4060 Ti)") is None
    assert extract_cpu("Gaming PC Core i7") is None


def test_cpu_rejects_even_core_numbers():
    assert extract_cpu("Intel Core i4 desktop") is None


# ── GPU ──────────────────────────────────────────────────────────────────


def test_gpu_rtx_is_nvidia_prefixed():
    assert extract_gpu("GeForce RTX 4070 SUPER 12GB") == "NVIDIA GeForce RTX 4070 SUPER"


def test_gpu_gtx():
    assert extract_gpu("GeForce GTX 1660 SUPER 6GB") == "NVIDIA GeForce GTX 1660 SUPER"


def test_gpu_radeon_is_amd_prefixed():
    assert extract_gpu("AMD Radeon RX 7600 XT 16GB") == "AMD Radeon RX 7600 XT"


def test_gpu_intel_arc_not_prefixed():
    assert extract_gpu("Intel Arc A750 8GB Graphics") == "Intel Arc A750"


def test_gpu_rtx_before_radeon():
    assert extract_gpu("Radeon RX 6600 or GeForce RTX 3060") == "NVIDIA GeForce RTX 3060"


def test_gpu_absent_without_brand_line():
    assert extract_gpu("Gaming PC (Intel Core i5, RTX 4060, 16GB RAM)") is None
    assert extract_gpu("HP Pavilion Desktop (Intel Core i3, 8GB RAM, 256GB SSD)") is None


# ── RAM ──────────────────────────────────────────────────────────────────


def test_ram_with_ram_suffix():
    assert extract_ram_gb("16GB RAM") == 16
    assert extract_ram_gb("8 GB RAM") == 8
    assert extract_ram_gb("32GB DDR4 RAM") == 32


def test_ram_ddr_without_suffix():
    assert extract_ram_gb("Intel Core i7, 32GB DDR5, 2TB SSD") == 32


def test_ram_suffix_rule_takes_priority():
    assert extract_ram_gb("16GB DDR4, 32GB RAM") == 32


def test_ram_absent_is_none_not_zero():
    assert extract_ram_gb("Intel Core i5 16GB 512GB SSD") is None
    assert extract_ram_gb("") is None


def test_ram_ignores_four_digit_numbers():
    assert extract_ram_gb("1024GB RAM") is None


# ── Storage ──────────────────────────────────────────────────────────────


def test_storage_tb_ssd():
    assert extract_storage("2TB NVMe SSD") == StorageSpec(gb=2048, kind=StorageKind.SSD)


def test_storage_fractional_tb_rounds():
    assert extract_storage("1.5TB SSD").gb == 1536
    assert extract_storage("0.5 TB SSD").gb == 512


def test_storage_gb_hdd():
    assert extract_storage("Desktop 500GB HDD") == StorageSpec(gb=500, kind=StorageKind.HDD)


def test_storage_ssd_keyword_beats_hdd():
    assert extract_storage("512GB SSD + 1TB HDD").kind == StorageKind.SSD


def test_storage_tb_pattern_checked_first():
    assert extract_storage("512GB SSD + 1TB HDD").gb == 1024


def test_storage_unknown_kind_when_no_keyword():
    assert extract_storage("16GB RAM, 512GB") == StorageSpec(gb=512, kind=StorageKind.UNKNOWN)


def test_storage_hdd_must_be_whole_word():
    assert extract_storage("1TB HDDs included").kind == StorageKind.UNKNOWN


def test_storage_kind_dropped_without_size():
    assert extract_storage("Fast SSD storage, 16GB RAM") == StorageSpec()


def test_storage_ram_number_not_taken_as_storage():
    assert extract_storage("8GB RAM SSD").gb is None


def test_storage_overflowing_tb_is_absent():
    title = "Intel Core i5, 16GB RAM, " + "9" * 400 + "TB SSD"
    assert extract_storage(title) == StorageSpec()


def test_storage_overflowing_tb_falls_through_to_gb():
    assert extract_storage("9" * 400 + "TB or 512GB SSD") == StorageSpec(gb=512, kind=StorageKind.SSD)


def test_parse_listing_survives_overflowing_tb():
    raw = RawListing(
        title="Desktop (Intel Core i5, 16GB RAM, " + "9" * 400 + "TB SSD)",
        url="https://www.amazon.com/dp/B0HUGE0001",
        price=899.0,
    )
    listing = parse_listing(raw)
    assert listing is not None
    assert listing.storage_gb is None
    assert listing.storage_kind is None


# ── Color ────────────────────────────────────────────────────────────────


def test_infer_color():
    assert infer_color("White Gaming PC") == "white"
    assert infer_color("Space Gray Mac mini") == "silver"
    assert infer_color("Black case") == "black"
    assert infer_color("RGB tower") is None


# ── parse_listing ────────────────────────────────────────────────────────


def _raw(**overrides) -> RawListing:
    data = {
        "title": FULL_TITLE,
        "url": "https://www.amazon.com/dp/B0TEST0001",
        "price": 1099.99,
        "image_url": "https://m.media-amazon.com/images/I/test.jpg",
    }
    data.update(overrides)
    return RawListing(**data)


def test_parse_listing_builds_structured_listing():
    listing = parse_listing(_raw())
    assert listing is not None
    assert listing.id == "https://www.amazon.com/dp/B0TEST0001"
    assert listing.url == listing.id
    assert listing.price == 1099.99
    assert listing.cpu == "Intel Core i5"
    assert listing.gpu == "NVIDIA GeForce RTX 4060 Ti"
    assert listing.ram_gb == 16
    assert listing.storage_gb == 1024
    assert listing.storage_kind == StorageKind.SSD
    assert listing.image_url.endswith("test.jpg")
    assert listing.color == "black"


def test_parse_listing_rejects_missing_or_bad_price():
    assert parse_listing(_raw(price=None)) is None
    assert parse_listing(_raw(price=0)) is None
    assert parse_listing(_raw(price=-5)) is None
    assert parse_listing(_raw(price=math.inf)) is None
    assert parse_listing(_raw(price=math.nan)) is None


def test_parse_listing_rejects_missing_url_or_title():
    assert parse_listing(_raw(url=None)) is None
    assert parse_listing(_raw(url="")) is None
    assert parse_listing(_raw(title=None)) is None


def test_parse_listing_rejects_missing_cpu_or_ram():
    assert parse_listing(_raw(title="Gaming PC (RTX 4060, 16GB RAM, 1TB SSD)")) is None
    assert parse_listing(_raw(title="Gaming PC (Intel Core i5, RTX 4060, 1TB SSD)")) is None


def test_parse_listing_optional_fields_absent():
    listing = parse_listing(_raw(title="HP Pavilion Desktop (Intel Core i3, 8GB RAM)"))
    assert listing is not None
    assert listing.gpu is None
    assert listing.storage_gb is None
    assert listing.storage_kind is None
