"""
utils/animal_format.py
----------------------
Cell transforms used by the animal table.
"""

from datetime import date
from typing import Optional

from dateutil.relativedelta import relativedelta

from models.animal import AnimalSex

_SEX_SIGNS = {AnimalSex.FEMALE: "♀", AnimalSex.MALE: "♂"}

MAPS_URL = "http://map.google.com/?q={lat:.6f},{long:.6f}"


def transform_sex_neutered(values: list) -> str:
    """[sex, neutered] -> "♀ Female" plus a "Neutered" line when applicable."""
    sex, neutered = values
    sign = _SEX_SIGNS.get(sex)
    text = f"{sign} {sex}" if sign else f"{sex}"
    return f"{text}\nNeutered" if neutered else text


def age_text(dob: date, today: Optional[date] = None) -> str:
    """Age in whole years, or in months for animals younger than a year."""
    diff = relativedelta(today or date.today(), dob)
    if diff.years:
        return f"{diff.years} year(s)"
    return f"{diff.months} month(s)"


def transform_dob_and_age(dob, today: Optional[date] = None) -> str:
    """Date of birth as "Apr 4, 2014" followed by the age on a second line."""
    if not isinstance(dob, date):
        return ""
    return f"{dob.strftime('%b')} {dob.day}, {dob.year}\n{age_text(dob, today)}"


def transform_location(values: list) -> Optional[str]:
    """[lat, long] -> Google Maps link when both coordinates are known."""
    lat, long = values
    if lat in (None, "") or long in (None, ""):
        return None
    return MAPS_URL.format(lat=float(lat), long=float(long))


def transform_type_breed_color(values: list) -> str:
    """[species, breed, color] -> "Dog: Beagle" with the color on a second line."""
    species, breed, color = values
    text = f"{species}: {breed}" if breed else f"{species}"
    return f"{text}\n{color}" if color else text


def transform_outcomes(values: list) -> str:
    """[type, subtype] -> type with the subtype on a second line."""
    outcome_type, outcome_subtype = values
    text = f"{outcome_type}"
    return f"{text}\n{outcome_subtype}" if outcome_subtype else text
