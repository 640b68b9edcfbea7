"""Inventory app package.

Holds the four bookable inventory types (flights, hotel rooms, tours and
cars) and the repository through which the booking engine reads them and
applies seat and date mutations. Catalog CRUD happens through the Django
admin; this app exposes no public API of its own.
"""
