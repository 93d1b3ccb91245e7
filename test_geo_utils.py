import math
import unittest

from searoutes.geo_utils import (haversine, iter_coordinates, line_length_km, normalize_pair,
                                 shift_geometry, split_antimeridian, triplicate_geojson,
                                 unwrap_lon, unwrap_path)

class TestHaversine(unittest.TestCase):
    def test_zero_for_identical_points(self):
        """Distance from a point to itself is zero"""
        for coord in [(0, 0), (13.5029, 43.6214), (-123.1203, 49.2705), (180, -89)]:
            self.assertEqual(haversine(coord, coord), 0)

    def test_symmetric(self):
        pairs = [
            ((13.5029, 43.6214), (20.2621, 39.4982)),
            ((-123.1203, 49.2705), (117.7006, 38.9847)),
            ((179.5, 10), (-179.5, 10)),
        ]
        for a, b in pairs:
            self.assertEqual(haversine(a, b), haversine(b, a))
            self.assertGreater(haversine(a, b), 0)

    def test_one_degree_on_equator(self):
        """One degree of longitude at the equator is 2*pi*R/360"""
        expected = 2 * math.pi * 6371000 / 360
        self.assertAlmostEqual(haversine((0, 0), (1, 0)), expected, places=6)
        self.assertAlmostEqual(haversine((0, 0), (0, 1)), expected, places=6)

    def test_shifted_copies_have_same_distance(self):
        """Shifting both points by 360 degrees does not change the distance"""
        a, b = (170, 10), (-170, 12)
        self.assertAlmostEqual(haversine(a, b), haversine((a[0] + 360, a[1]), (b[0] + 360, b[1])), places=6)

    def test_line_length_km(self):
        coords = [(0, 0), (1, 0), (2, 0)]
        self.assertAlmostEqual(line_length_km(coords), 2 * haversine((0, 0), (1, 0)) / 1000, places=9)
        self.assertEqual(line_length_km([(0, 0)]), 0)

class TestTriplicate(unittest.TestCase):
    def setUp(self):
        self.network = {
            'type': 'FeatureCollection',
            'features': [
                {'type': 'Feature', 'properties': {'fid': 1},
                 'geometry': {'type': 'LineString', 'coordinates': [[0, 0], [1, 1]]}},
                {'type': 'Feature', 'properties': {'fid': 2},
                 'geometry': {'type': 'LineString', 'coordinates': [[170, 10], [180, 10]]}},
            ]
        }

    def test_feature_count(self):
        tripled = triplicate_geojson(self.network)
        self.assertEqual(tripled['type'], 'FeatureCollection')
        self.assertEqual(len(tripled['features']), 3 * len(self.network['features']))

    def test_each_feature_once_per_shift(self):
        tripled = triplicate_geojson(self.network)
        for fid in (1, 2):
            shifts = sorted(f['properties']['__wrapShift'] for f in tripled['features']
                            if f['properties']['fid'] == fid)
            self.assertEqual(shifts, [-360, 0, 360])

    def test_coordinates_are_shifted(self):
        tripled = triplicate_geojson(self.network)
        for feature in tripled['features']:
            dx = feature['properties']['__wrapShift']
            if feature['properties']['fid'] == 2:
                self.assertEqual(feature['geometry']['coordinates'], [[170 + dx, 10], [180 + dx, 10]])

    def test_original_not_modified(self):
        triplicate_geojson(self.network)
        self.assertEqual(self.network['features'][0]['properties'], {'fid': 1})
        self.assertEqual(self.network['features'][0]['geometry']['coordinates'], [[0, 0], [1, 1]])

    def test_empty_network(self):
        tripled = triplicate_geojson({'type': 'FeatureCollection', 'features': []})
        self.assertEqual(tripled['features'], [])

    def test_shift_geometry_any_depth(self):
        point = shift_geometry({'type': 'Point', 'coordinates': [10, 5]}, 360)
        self.assertEqual(point['coordinates'], [370, 5])

        polygon = shift_geometry({'type': 'Polygon', 'coordinates': [[[0, 0], [1, 0], [1, 1], [0, 0]]]}, -360)
        self.assertEqual(polygon['coordinates'], [[[-360, 0], [-359, 0], [-359, 1], [-360, 0]]])

        multi = shift_geometry({'type': 'MultiPolygon', 'coordinates': [[[[0, 0], [1, 1], [0, 0]]]]}, 360)
        self.assertEqual(multi['coordinates'], [[[[360, 0], [361, 1], [360, 0]]]])

        collection = shift_geometry({'type': 'GeometryCollection', 'geometries': [
            {'type': 'Point', 'coordinates': [1, 2]}]}, 360)
        self.assertEqual(collection['geometries'][0]['coordinates'], [361, 2])

class TestUnwrap(unittest.TestCase):
    def test_range(self):
        """Every unwrapped longitude lies in (-180, 180]"""
        lons = [-540, -360.5, -190, -180, -179.9, 0, 45.5, 179.9, 180, 190, 359, 360, 540]
        path = unwrap_path([[lon, 3] for lon in lons])
        for lon, lat in path:
            self.assertGreater(lon, -180)
            self.assertLessEqual(lon, 180)
            self.assertEqual(lat, 3)

    def test_values(self):
        self.assertAlmostEqual(unwrap_lon(190), -170)
        self.assertAlmostEqual(unwrap_lon(-190), 170)
        self.assertEqual(unwrap_lon(-180), 180)
        self.assertEqual(unwrap_lon(540), 180)
        self.assertAlmostEqual(unwrap_lon(370.5), 10.5)

    def test_in_range_untouched(self):
        """Longitudes already in range are returned unchanged"""
        self.assertEqual(unwrap_lon(13.5068), 13.5068)
        self.assertEqual(unwrap_path([[13.5068, 43.621025]]), [[13.5068, 43.621025]])

class TestNormalizePair(unittest.TestCase):
    def test_no_crossing(self):
        self.assertEqual(normalize_pair([10, 1], [20, 2]), ([10, 1], [20, 2]))
        self.assertEqual(normalize_pair([-90, 1], [90, 2]), ([-90, 1], [90, 2]))

    def test_shifts_smaller_longitude(self):
        a, b = normalize_pair([-123.1203, 49.2705], [117.7006, 38.9847])
        self.assertAlmostEqual(a[0], 236.8797)
        self.assertEqual(a[1], 49.2705)
        self.assertEqual(b, [117.7006, 38.9847])

        a, b = normalize_pair([117.7006, 38.9847], [-123.1203, 49.2705])
        self.assertEqual(a, [117.7006, 38.9847])
        self.assertAlmostEqual(b[0], 236.8797)

    def test_shared_span(self):
        a, b = normalize_pair([170, 0], [-170, 0])
        self.assertLessEqual(abs(a[0] - b[0]), 180)

class TestSplitAntimeridian(unittest.TestCase):
    def test_no_crossing(self):
        feature = split_antimeridian([[0, 0], [1, 1], [2, 1]], {'distance': 1})
        self.assertEqual(feature['type'], 'Feature')
        self.assertEqual(feature['geometry']['type'], 'LineString')
        self.assertEqual(len(feature['geometry']['coordinates']), 3)
        self.assertEqual(feature['properties'], {'distance': 1})

    def test_eastward_crossing(self):
        feature = split_antimeridian([[170, 10], [179, 10], [-179, 20], [-170, 20]])
        geometry = feature['geometry']
        self.assertEqual(geometry['type'], 'MultiLineString')
        self.assertEqual(len(geometry['coordinates']), 2)
        west, east = geometry['coordinates']
        self.assertEqual(tuple(west[-1]), (180.0, 15.0))
        self.assertEqual(tuple(east[0]), (-180.0, 15.0))

    def test_westward_crossing(self):
        feature = split_antimeridian([[-170, 0], [-179, 0], [179, 0], [170, 0]])
        first, second = feature['geometry']['coordinates']
        self.assertEqual(tuple(first[-1]), (-180.0, 0.0))
        self.assertEqual(tuple(second[0]), (180.0, 0.0))

    def test_vertex_on_antimeridian(self):
        feature = split_antimeridian([[170, 10], [180, 10], [-170, 10]])
        self.assertEqual(feature['geometry']['type'], 'MultiLineString')
        first, second = feature['geometry']['coordinates']
        self.assertEqual([tuple(c) for c in first], [(170.0, 10.0), (180.0, 10.0)])
        self.assertEqual([tuple(c) for c in second], [(-180.0, 10.0), (-170.0, 10.0)])

    def test_degenerate_path(self):
        self.assertIsNone(split_antimeridian([[1, 1], [1, 1]])['geometry'])

class TestIterCoordinates(unittest.TestCase):
    def test_duplicates_kept_in_order(self):
        network = {
            'type': 'FeatureCollection',
            'features': [
                {'type': 'Feature', 'properties': {},
                 'geometry': {'type': 'LineString', 'coordinates': [[0, 0], [1, 0], [1, 1]]}},
                {'type': 'Feature', 'properties': {},
                 'geometry': {'type': 'MultiLineString', 'coordinates': [[[1, 1], [2, 1]], [[2, 2], [3, 3]]]}},
            ]
        }
        self.assertEqual(list(iter_coordinates(network)),
                         [[0, 0], [1, 0], [1, 1], [1, 1], [2, 1], [2, 2], [3, 3]])

    def test_empty_and_missing(self):
        self.assertEqual(list(iter_coordinates(None)), [])
        self.assertEqual(list(iter_coordinates({'type': 'Feature', 'geometry': None})), [])

if __name__ == '__main__':
    unittest.main()
