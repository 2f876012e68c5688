"""
Country names as they appear in procurement feeds, mapped to ISO 3166-1 alpha-2.

The table lists, per code, the spellings seen across English, Spanish, French,
German, Hungarian, Slovenian, Croatian and Serbian (Latin and Cyrillic)
publications. Lookups ignore case, diacritics and punctuation, so each
spelling needs to be listed only once.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Tuple

from .normalize import transliterate_to_latin


COUNTRY_NAMES: Dict[str, Tuple[str, ...]] = {
    "AD": ("Andorra", "Andorre", "Андора"),
    "AL": ("Albania", "Albanie", "Albanien", "Albánia", "Albanija", "Албанија"),
    "AR": ("Argentina", "Argentine", "Argentinien", "Argentína", "Аргентина"),
    "AT": ("Austria", "Autriche", "Österreich", "Ausztria", "Avstrija", "Austrija", "Аустрија"),
    "AU": ("Australia", "Australie", "Australien", "Ausztrália", "Avstralija", "Australija", "Аустралија"),
    "BA": (
        "Bosnia and Herzegovina",
        "Bosnia y Herzegovina",
        "Bosnie-Herzégovine",
        "Bosnien und Herzegowina",
        "Bosznia-Hercegovina",
        "Bosna in Hercegovina",
        "Bosna i Hercegovina",
        "Босна и Херцеговина",
    ),
    "BE": ("Belgium", "Bélgica", "Belgique", "Belgien", "Belgia", "Belgium", "Belgija", "Белгија"),
    "BG": ("Bulgaria", "Bulgarie", "Bulgarien", "Bulgária", "Bolgarija", "Bugarska", "Бугарска"),
    "BO": ("Bolivia", "Bolivie", "Bolivien", "Bolívia", "Боливија"),
    "BR": ("Brazil", "Brasil", "Brésil", "Brasilien", "Brazília", "Brazilija", "Brazil", "Бразил"),
    "BY": ("Belarus", "Bielorrusia", "Biélorussie", "Weißrussland", "Fehéroroszország", "Belorusija", "Bjelorusija", "Белорусија"),
    "BZ": ("Belize", "Belice"),
    "CA": ("Canada", "Canadá", "Kanada", "Канада"),
    "CH": ("Switzerland", "Suiza", "Suisse", "Schweiz", "Svájc", "Švica", "Švicarska", "Швајцарска"),
    "CL": ("Chile", "Chili", "Chilie", "Čile", "Чиле"),
    "CN": ("China", "Chine", "Kína", "Kitajska", "Kina", "Кина"),
    "CO": ("Colombia", "Colombie", "Kolumbien", "Kolumbia", "Kolumbija", "Колумбија"),
    "CR": ("Costa Rica", "Kostarika", "Kosta Rika", "Коста Рика"),
    "CU": ("Cuba", "Kuba", "Куба"),
    "CY": ("Cyprus", "Chipre", "Chypre", "Zypern", "Ciprus", "Ciper", "Cipar", "Кипар"),
    "CZ": (
        "Czech Republic",
        "Czechia",
        "República Checa",
        "Chequia",
        "République tchèque",
        "Tschechien",
        "Csehország",
        "Češka",
        "Češka republika",
        "Чешка",
    ),
    "DE": ("Germany", "Alemania", "Allemagne", "Deutschland", "Németország", "Nemčija", "Njemačka", "Немачка"),
    "DK": ("Denmark", "Dinamarca", "Danemark", "Dänemark", "Dánia", "Danska", "Данска"),
    "DO": ("Dominican Republic", "República Dominicana", "République dominicaine", "Dominikanische Republik"),
    "EC": ("Ecuador", "Équateur", "Ekvador", "Еквадор"),
    "EE": ("Estonia", "Estonie", "Estland", "Észtország", "Estonija", "Естонија"),
    "ES": ("Spain", "España", "Espagne", "Spanien", "Spanyolország", "Španija", "Španjolska", "Шпанија"),
    "FI": ("Finland", "Finlandia", "Finlande", "Finnland", "Finnország", "Finska", "Финска"),
    "FR": ("France", "Francia", "Frankreich", "Franciaország", "Francija", "Francuska", "Француска"),
    "GB": (
        "United Kingdom",
        "Great Britain",
        "UK",
        "Reino Unido",
        "Royaume-Uni",
        "Vereinigtes Königreich",
        "Egyesült Királyság",
        "Nagy-Britannia",
        "Združeno kraljestvo",
        "Velika Britanija",
        "Ujedinjeno Kraljevstvo",
        "Уједињено Краљевство",
        "Велика Британија",
    ),
    "GR": ("Greece", "Grecia", "Grèce", "Griechenland", "Görögország", "Grčija", "Grčka", "Грчка"),
    "GT": ("Guatemala", "Guatémala", "Гватемала"),
    "HN": ("Honduras", "Хондурас"),
    "HR": ("Croatia", "Croacia", "Croatie", "Kroatien", "Horvátország", "Hrvaška", "Hrvatska", "Хрватска"),
    "HU": ("Hungary", "Hungría", "Hongrie", "Ungarn", "Magyarország", "Madžarska", "Mađarska", "Мађарска"),
    "IE": ("Ireland", "Irlanda", "Irlande", "Irland", "Írország", "Irska", "Ирска"),
    "IL": ("Israel", "Israël", "Izrael", "Израел"),
    "IN": ("India", "Inde", "Indien", "Индија", "Indija"),
    "IS": ("Iceland", "Islandia", "Islande", "Island", "Izland", "Islandija", "Исланд"),
    "IT": ("Italy", "Italia", "Italie", "Italien", "Olaszország", "Italija", "Италија"),
    "JP": ("Japan", "Japón", "Japon", "Japán", "Japonska", "Japan", "Јапан"),
    "KR": ("South Korea", "Korea, Republic of", "Corea del Sur", "Corée du Sud", "Südkorea", "Dél-Korea", "Južna Koreja", "Јужна Кореја"),
    "LI": ("Liechtenstein", "Lihtenštajn", "Лихтенштајн"),
    "LT": ("Lithuania", "Lituania", "Lituanie", "Litauen", "Litvánia", "Litva", "Литванија", "Litvanija"),
    "LU": ("Luxembourg", "Luxemburgo", "Luxemburg", "Luksemburg", "Луксембург"),
    "LV": ("Latvia", "Letonia", "Lettonie", "Lettland", "Lettország", "Latvija", "Letonija", "Летонија"),
    "MD": ("Moldova", "Moldavia", "Moldavie", "Moldau", "Moldova", "Moldavija", "Молдавија"),
    "ME": ("Montenegro", "Monténégro", "Črna gora", "Crna Gora", "Црна Гора"),
    "MK": (
        "North Macedonia",
        "Macedonia",
        "Macedonia del Norte",
        "Macédoine du Nord",
        "Nordmazedonien",
        "Észak-Macedónia",
        "Severna Makedonija",
        "Sjeverna Makedonija",
        "Makedonija",
        "Северна Македонија",
    ),
    "MT": ("Malta", "Malte", "Málta", "Малта"),
    "MX": ("Mexico", "México", "Mexique", "Mexiko", "Mexikó", "Mehika", "Meksiko", "Мексико"),
    "NI": ("Nicaragua", "Никарагва"),
    "NL": ("Netherlands", "The Netherlands", "Países Bajos", "Pays-Bas", "Niederlande", "Hollandia", "Nizozemska", "Holandija", "Холандија"),
    "NO": ("Norway", "Noruega", "Norvège", "Norwegen", "Norvégia", "Norveška", "Norveška", "Норвешка"),
    "PA": ("Panama", "Panamá", "Панама"),
    "PE": ("Peru", "Perú", "Pérou", "Перу"),
    "PL": ("Poland", "Polonia", "Pologne", "Polen", "Lengyelország", "Poljska", "Пољска"),
    "PT": ("Portugal", "Portugália", "Portugalska", "Portugal", "Португалија", "Portugalija"),
    "PY": ("Paraguay", "Paragvaj", "Парагвај"),
    "RO": ("Romania", "Rumania", "Roumanie", "Rumänien", "Románia", "Romunija", "Rumunjska", "Rumunija", "Румунија"),
    "RS": ("Serbia", "Serbie", "Serbien", "Szerbia", "Srbija", "Србија"),
    "RU": ("Russia", "Russian Federation", "Rusia", "Russie", "Russland", "Oroszország", "Rusija", "Русија"),
    "SE": ("Sweden", "Suecia", "Suède", "Schweden", "Svédország", "Švedska", "Шведска"),
    "SI": ("Slovenia", "Eslovenia", "Slovénie", "Slowenien", "Szlovénia", "Slovenija", "Словенија"),
    "SK": ("Slovakia", "Eslovaquia", "Slovaquie", "Slowakei", "Szlovákia", "Slovaška", "Slovačka", "Словачка"),
    "SV": ("El Salvador", "Salvador", "Салвадор"),
    "TR": ("Turkey", "Türkiye", "Turquía", "Turquie", "Türkei", "Törökország", "Turčija", "Turska", "Турска"),
    "UA": ("Ukraine", "Ucrania", "Ukrajna", "Ukrajina", "Украјина"),
    "US": (
        "United States",
        "United States of America",
        "USA",
        "Estados Unidos",
        "Estados Unidos de América",
        "États-Unis",
        "Vereinigte Staaten",
        "Egyesült Államok",
        "Združene države Amerike",
        "Sjedinjene Američke Države",
        "Sjedinjene Američke Države",
        "Сједињене Америчке Државе",
        "SAD",
    ),
    "UY": ("Uruguay", "Urugvaj", "Уругвај"),
    "VE": ("Venezuela", "Venezuela, República Bolivariana de", "Венецуела", "Venecuela"),
    "XK": ("Kosovo", "Koszovó", "Kosova", "Косово"),
}

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def _lookup_key(name: Any) -> str:
    return _NON_ALNUM.sub(" ", transliterate_to_latin(name).lower()).strip()


_COUNTRY_INDEX: Dict[str, str] = {
    _lookup_key(name): code for code, names in COUNTRY_NAMES.items() for name in names
}


def resolve_country_name(display_name: Any) -> Any:
    """
    Map a localized country name to its ISO alpha-2 code.

    Unmatched input is returned unchanged; callers treat anything that is not a
    two-letter code as unresolved.
    """
    if not isinstance(display_name, str):
        return display_name
    return _COUNTRY_INDEX.get(_lookup_key(display_name), display_name)


def is_country_code(value: Any) -> bool:
    return isinstance(value, str) and len(value) == 2 and value.isalpha() and value.isupper()


def resolve_country_code(value: Any) -> str:
    """Accept either an alpha-2 code (any case) or a country name; "" when unresolved."""
    if not isinstance(value, str) or not value.strip():
        return ""
    candidate = value.strip()
    if len(candidate) == 2 and candidate.isalpha():
        return candidate.upper()
    resolved = resolve_country_name(candidate)
    return resolved if is_country_code(resolved) else ""
