"""
Hotel catalogue model.
Hotels are read from the 'hoteles' table, whose column names are Spanish
and partly contain spaces; rows are normalised to English keys here.
"""

import random

from database import get_db, tables
from models.booking import calculate_nights

# Remote column -> normalised key
HOTEL_COLUMNS = {
    'id_interno': 'id',
    'ID': 'external_id',
    'TIPO DE NEGOCIACION': 'negotiation_type',
    'MARCA': 'brand',
    'ESTADO': 'state',
    'CIUDAD / ZONA': 'city',
    'TARIFA HAB SENCILLA Q': 'single_rate',
    'TARIFA HAB DOBLE QQ': 'double_rate',
    'MENORES DE EDAD': 'minors',
    'Desayuno': 'breakfast',
    'IMAGES': 'image',
}


def normalize_hotel(row: dict) -> dict:
    """
    Map a 'hoteles' row to normalised keys.

    Args:
        row: Raw table row

    Returns:
        Hotel dict with English keys; rates as floats
    """
    hotel = {key: row.get(column) for column, key in HOTEL_COLUMNS.items()}
    for rate_key in ('single_rate', 'double_rate'):
        try:
            hotel[rate_key] = float(hotel[rate_key] or 0)
        except (TypeError, ValueError):
            hotel[rate_key] = 0.0
    for text_key in ('brand', 'state', 'city'):
        hotel[text_key] = hotel[text_key] or ''
    return hotel


def get_all_hotels() -> list:
    """
    Get the whole hotel catalogue ordered by brand.

    Returns:
        List of normalised hotel dicts
    """
    response = (
        get_db().table(tables.HOTELS)
        .select('*')
        .order('MARCA', desc=False)
        .execute()
    )
    return [normalize_hotel(row) for row in (response.data or [])]


def get_hotel_by_id(hotel_id: int) -> dict:
    """
    Get a hotel by its internal id.

    Args:
        hotel_id: id_interno value

    Returns:
        Normalised hotel dict or None if not found
    """
    rows = (
        get_db().table(tables.HOTELS)
        .select('*')
        .eq('id_interno', hotel_id)
        .limit(1)
        .execute()
        .data
    ) or []
    return normalize_hotel(rows[0]) if rows else None


def filter_hotels(hotels: list, search: str = '', state: str = '',
                  city: str = '', brand: str = '') -> list:
    """
    Filter pre-loaded hotels.

    The search term is a case-insensitive substring over brand, city and
    state; state, city and brand filters are exact matches.

    Args:
        hotels: Normalised hotel dicts
        search: Free text (optional)
        state: Exact state (optional)
        city: Exact city/zone (optional)
        brand: Exact brand (optional)

    Returns:
        Filtered list (original order)
    """
    filtered = list(hotels)

    if search:
        search_lower = search.lower()
        filtered = [
            h for h in filtered
            if search_lower in h['brand'].lower()
            or search_lower in h['city'].lower()
            or search_lower in h['state'].lower()
        ]

    if state:
        filtered = [h for h in filtered if h['state'] == state]

    if city:
        filtered = [h for h in filtered if h['city'] == city]

    if brand:
        filtered = [h for h in filtered if h['brand'] == brand]

    return filtered


def get_filter_options(hotels: list) -> dict:
    """Sorted unique states, cities and brands for the filter dropdowns."""
    return {
        'states': sorted({h['state'] for h in hotels if h['state']}),
        'cities': sorted({h['city'] for h in hotels if h['city']}),
        'brands': sorted({h['brand'] for h in hotels if h['brand']}),
    }


def sample_hotels(hotels: list, count: int = 3, rng: random.Random = None) -> list:
    """
    Random selection shown before the first search.

    Args:
        hotels: Normalised hotel dicts
        count: How many to show
        rng: Random generator (tests pass a seeded one)

    Returns:
        Up to `count` hotels
    """
    rng = rng or random
    return rng.sample(hotels, min(count, len(hotels)))


def get_rate(hotel: dict, room_type: str) -> float:
    """Nightly rate for the room type ('single' or 'double')."""
    return hotel['single_rate'] if room_type == 'single' else hotel['double_rate']


def calculate_total_price(hotel: dict, check_in: str, check_out: str, room_type: str) -> dict:
    """
    Quote a stay.

    Args:
        hotel: Normalised hotel dict (None yields a zero quote)
        check_in: Check-in date (YYYY-MM-DD)
        check_out: Check-out date (YYYY-MM-DD)
        room_type: 'single' or 'double'

    Returns:
        Dict with nights, price_per_night and total
    """
    if not check_in or not check_out or not hotel:
        return {'nights': 0, 'price_per_night': 0.0, 'total': 0.0}

    nights = calculate_nights(check_in, check_out)
    price_per_night = get_rate(hotel, room_type)
    return {
        'nights': nights,
        'price_per_night': price_per_night,
        'total': nights * price_per_night,
    }
