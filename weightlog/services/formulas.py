import math

# Approximate kcal that must be burned to lose 1 kg of body fat
KCAL_PER_KG = 7200

# Average month length in days (365.25 / 12)
DAYS_PER_MONTH = 30.4375

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary":   1.2,
    "light":       1.375,
    "moderate":    1.55,
    "active":      1.725,
    "very_active": 1.9,
}

# Safety floor calories
MIN_CALORIES: dict[str, int] = {
    "male":   1500,
    "female": 1200,
}


def round_half_up(value: float) -> int:
    """Round .5 away from the floor, as a browser's Math.round does."""
    return int(math.floor(value + 0.5))


def calculate_bmr(weight, height, age, gender="male"):
    # Harris-Benedict, revised (Roza & Shizgal)
    if gender == "male":
        return 13.397 * weight + 4.799 * height - 5.677 * age + 88.362
    else:
        return 9.247 * weight + 3.098 * height - 4.330 * age + 447.593


def calculate_tdee(bmr, activity_factor=1.0):
    return bmr * activity_factor


def months_to_days(months):
    return math.ceil(months * DAYS_PER_MONTH)
