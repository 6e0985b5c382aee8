import pytest

from geo_attendance.geofence.model import GeoPoint
from geo_attendance.geofence.validator import GeoValidator, haversine_distance
from geo_attendance.tenants.model import TenantConfiguration


def test_distance_to_self_is_zero():
    p = GeoPoint(6.4654, 3.4064)
    assert haversine_distance(p, p) == 0.0


def test_distance_is_symmetric():
    a = GeoPoint(48.8566, 2.3522)
    b = GeoPoint(51.5074, -0.1278)
    assert haversine_distance(a, b) == pytest.approx(haversine_distance(b, a), abs=1e-6)


def test_one_degree_of_longitude_on_equator():
    d = haversine_distance(GeoPoint(0, 0), GeoPoint(0, 1))
    assert d == pytest.approx(111_194.93, abs=1.0)


def test_antipodal_points_are_half_circumference():
    d = haversine_distance(GeoPoint(0, 0), GeoPoint(0, 180))
    assert d == pytest.approx(3.141592653589793 * 6_371_000, abs=1.0)


def test_tiny_distance_is_stable():
    d = haversine_distance(GeoPoint(10.0, 10.0), GeoPoint(10.0, 10.0000001))
    assert 0 < d < 0.02


def test_no_site_center_accepts_anywhere():
    config = TenantConfiguration(tenant_id="t1", site_center=None, geofence_radius_meters=10)
    check = GeoValidator().validate(GeoPoint(-33.9, 151.2), config)
    assert check.within_bounds is True
    assert check.distance_meters == 0.0


def test_radius_boundary_is_inclusive():
    center = GeoPoint(0, 0)
    point = GeoPoint(0, 0.001)
    exact = haversine_distance(center, point)
    config = TenantConfiguration(tenant_id="t1", site_center=center, geofence_radius_meters=exact)
    assert GeoValidator().validate(point, config).within_bounds is True


def test_point_outside_radius():
    config = TenantConfiguration(tenant_id="t1", site_center=GeoPoint(0, 0), geofence_radius_meters=200)
    check = GeoValidator().validate(GeoPoint(0.0044966, 0), config)
    assert check.within_bounds is False
    assert check.distance_meters == pytest.approx(500, abs=1.0)
