"""Geo-fenced attendance package.

Organized by feature modules (geofence, attendance, stats, patterns, alerts, ...)
with a thin Flask controller layer over service/repository layers.
"""
