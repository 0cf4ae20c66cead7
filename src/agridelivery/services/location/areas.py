"""Kenyan county reference points used to give manual locations coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ...models.domain import GeoCoordinates


@dataclass(frozen=True, slots=True)
class County:
    id: str
    name: str
    coordinates: GeoCoordinates


def _county(county_id: str, name: str, lat: float, lng: float) -> County:
    return County(id=county_id, name=name, coordinates=GeoCoordinates(lat=lat, lng=lng))


COUNTIES: tuple[County, ...] = (
    _county("001", "Mombasa", -4.0435, 39.6682),
    _county("002", "Kwale", -4.1742, 39.4520),
    _county("003", "Kilifi", -3.6309, 39.8493),
    _county("004", "Tana River", -1.5000, 40.0000),
    _county("005", "Lamu", -2.2717, 40.9020),
    _county("006", "Taita Taveta", -3.3869, 38.5587),
    _county("007", "Garissa", -0.4536, 39.6401),
    _county("008", "Wajir", 1.7471, 40.0573),
    _county("009", "Mandera", 3.9366, 41.8670),
    _county("010", "Marsabit", 2.3284, 37.9899),
    _county("011", "Isiolo", 0.3556, 37.5833),
    _county("012", "Meru", 0.0469, 37.6553),
    _county("013", "Tharaka Nithi", -0.3347, 37.6486),
    _county("014", "Embu", -0.5310, 37.4570),
    _county("015", "Kitui", -1.3667, 38.0167),
    _county("016", "Machakos", -1.5177, 37.2634),
    _county("017", "Makueni", -1.8040, 37.6240),
    _county("018", "Nyandarua", -0.2827, 36.3800),
    _county("019", "Nyeri", -0.4197, 36.9475),
    _county("020", "Kirinyaga", -0.6599, 37.3826),
    _county("021", "Murang'a", -0.7167, 37.1500),
    _county("022", "Kiambu", -1.1714, 36.8356),
    _county("023", "Turkana", 3.1190, 35.5977),
    _county("024", "West Pokot", 1.2381, 35.1119),
    _county("025", "Samburu", 1.0961, 36.9720),
    _county("026", "Trans Nzoia", 1.0194, 34.9597),
    _county("027", "Uasin Gishu", 0.5143, 35.2698),
    _county("028", "Elgeyo Marakwet", 0.6697, 35.5080),
    _county("029", "Nandi", 0.1769, 35.1028),
    _county("030", "Baringo", 0.4917, 36.0833),
    _county("031", "Laikipia", 0.3667, 36.7833),
    _county("032", "Nakuru", -0.3031, 36.0800),
    _county("033", "Narok", -1.0833, 35.8667),
    _county("034", "Kajiado", -1.8524, 36.7820),
    _county("035", "Kericho", -0.3676, 35.2839),
    _county("036", "Bomet", -0.7833, 35.3167),
    _county("037", "Kakamega", 0.2827, 34.7519),
    _county("038", "Vihiga", 0.0667, 34.7167),
    _county("039", "Bungoma", 0.5635, 34.5606),
    _county("040", "Busia", 0.4600, 34.1117),
    _county("041", "Siaya", -0.0635, 34.2864),
    _county("042", "Kisumu", -0.0917, 34.7680),
    _county("043", "Homa Bay", -0.5273, 34.4569),
    _county("044", "Migori", -1.0634, 34.4731),
    _county("045", "Kisii", -0.6774, 34.7797),
    _county("046", "Nyamira", -0.5667, 34.9333),
    _county("047", "Nairobi", -1.2921, 36.8219),
)

_BY_ID = {county.id: county for county in COUNTIES}
_BY_NAME = {county.name.lower(): county for county in COUNTIES}


def find_county(key: Optional[str]) -> Optional[County]:
    """Look a county up by id ("047"), a nested area id ("047-02-01") or name."""
    if not key:
        return None
    key = key.strip()
    county_id = key.split("-", 1)[0]
    if county_id in _BY_ID:
        return _BY_ID[county_id]
    return _BY_NAME.get(key.lower())
