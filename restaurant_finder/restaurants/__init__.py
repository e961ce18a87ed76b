"""
Reference restaurant backend.

Responsibilities:
- Load the bundled restaurant dataset and location gazetteer.
- Geocode a free-form address or postal code to coordinates.
- Rank nearby restaurants by distance, rating, price or name.
- Cache ranked results for repeated searches.
"""
