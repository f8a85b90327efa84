"""Localized weather condition descriptions.

The table is built once at import time and exposed read-only.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from .models import Language

# key -> (ru, es, ko); English text is the key itself.
_DESCRIPTIONS: dict[str, tuple[str, str, str]] = {
    "Clear": ("Ясно", "Despejado", "맑음"),
    "Clear sky": ("Ясно", "Cielo despejado", "맑음"),
    "Mainly clear": ("Преимущественно ясно", "Mayormente despejado", "대체로 맑음"),
    "Mostly clear": ("Легкая облачность", "Mayormente despejado", "대체로 맑음"),
    "Fair": ("Малооблачно", "Poco nuboso", "대체로 맑음"),
    "Partly cloudy": ("Переменная облачность", "Parcialmente nublado", "부분적으로 흐림"),
    "Mostly cloudy": ("Сильная облачность", "Mayormente nublado", "대체로 흐림"),
    "Overcast": ("Пасмурно", "Nublado", "흐림"),
    "Cloudy": ("Облачно", "Nublado", "흐림"),
    "Fog": ("Туман", "Niebla", "안개"),
    "Light fog": ("Легкий туман", "Niebla ligera", "옅은 안개"),
    "Depositing rime fog": ("Изморозь", "Niebla con escarcha", "서리 안개"),
    "Drizzle": ("Морось", "Llovizna", "이슬비"),
    "Light drizzle": ("Легкая морось", "Llovizna ligera", "약한 이슬비"),
    "Moderate drizzle": ("Умеренная морось", "Llovizna moderada", "보통 이슬비"),
    "Dense drizzle": ("Сильная морось", "Llovizna intensa", "짙은 이슬비"),
    "Freezing drizzle": ("Ледяная морось", "Llovizna helada", "얼음 이슬비"),
    "Light freezing drizzle": (
        "Слабая ледяная морось",
        "Llovizna helada ligera",
        "약한 얼음 이슬비",
    ),
    "Dense freezing drizzle": (
        "Сильная ледяная морось",
        "Llovizna helada intensa",
        "짙은 얼음 이슬비",
    ),
    "Rain": ("Дождь", "Lluvia", "비"),
    "Light rain": ("Небольшой дождь", "Lluvia ligera", "약한 비"),
    "Slight rain": ("Небольшой дождь", "Lluvia ligera", "약한 비"),
    "Moderate rain": ("Умеренный дождь", "Lluvia moderada", "보통 비"),
    "Heavy rain": ("Сильный дождь", "Lluvia intensa", "강한 비"),
    "Freezing rain": ("Ледяной дождь", "Lluvia helada", "얼음 비"),
    "Light freezing rain": ("Слабый ледяной дождь", "Lluvia helada ligera", "약한 얼음 비"),
    "Heavy freezing rain": ("Сильный ледяной дождь", "Lluvia helada intensa", "강한 얼음 비"),
    "Sleet": ("Мокрый снег", "Aguanieve", "진눈깨비"),
    "Snow": ("Снег", "Nevada", "눈"),
    "Light snow": ("Небольшой снег", "Nieve ligera", "약한 눈"),
    "Heavy snow": ("Сильный снег", "Nieve intensa", "강한 눈"),
    "Slight snow fall": ("Небольшой снег", "Nevada ligera", "약한 눈"),
    "Moderate snow fall": ("Умеренный снег", "Nevada moderada", "보통 눈"),
    "Heavy snow fall": ("Сильный снегопад", "Nevada intensa", "강한 눈"),
    "Flurries": ("Поземок", "Chubascos de nieve", "눈보라"),
    "Snow grains": ("Снежная крупа", "Granos de nieve", "눈 알갱이"),
    "Ice pellets": ("Град", "Granizo", "우박"),
    "Light ice pellets": ("Небольшой град", "Granizo ligero", "약한 우박"),
    "Heavy ice pellets": ("Сильный град", "Granizo intenso", "강한 우박"),
    "Rain showers": ("Ливень", "Chubascos", "소나기"),
    "Slight rain showers": ("Небольшой ливень", "Chubascos ligeros", "약한 소나기"),
    "Moderate rain showers": ("Умеренный ливень", "Chubascos moderados", "보통 소나기"),
    "Violent rain showers": ("Сильный ливень", "Chubascos intensos", "강한 소나기"),
    "Snow showers": ("Снежный ливень", "Chubascos de nieve", "눈 소나기"),
    "Slight snow showers": (
        "Небольшой снежный ливень",
        "Chubascos de nieve ligeros",
        "약한 눈 소나기",
    ),
    "Heavy snow showers": (
        "Сильный снежный ливень",
        "Chubascos de nieve intensos",
        "강한 눈 소나기",
    ),
    "Thunderstorm": ("Гроза", "Tormenta", "뇌우"),
    "Thunderstorm with slight hail": (
        "Гроза с небольшим градом",
        "Tormenta con granizo ligero",
        "약한 우박을 동반한 뇌우",
    ),
    "Thunderstorm with heavy hail": (
        "Гроза с сильным градом",
        "Tormenta con granizo intenso",
        "강한 우박을 동반한 뇌우",
    ),
    "Unknown": ("Неизвестно", "Desconocido", "알 수 없음"),
}


def _build_table() -> Mapping[str, Mapping[str, str]]:
    table: dict[str, dict[str, str]] = {Language.ENGLISH.value: {}}
    languages = (Language.RUSSIAN, Language.SPANISH, Language.KOREAN)
    for key, texts in _DESCRIPTIONS.items():
        table[Language.ENGLISH.value][key] = key
        for language, text in zip(languages, texts, strict=True):
            table.setdefault(language.value, {})[key] = text
    return MappingProxyType({lang: MappingProxyType(rows) for lang, rows in table.items()})


TRANSLATIONS: Mapping[str, Mapping[str, str]] = _build_table()


def translate(language: Language | str, key: str) -> str:
    """Return the localized text for ``key``, or ``key`` itself when missing."""
    return TRANSLATIONS.get(str(language), {}).get(key, key)
