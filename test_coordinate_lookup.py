import unittest

from shapely.geometry import Point

from searoutes.coordinate_lookup import CoordinateLookup
from searoutes.errors import ResourceError

class TestCoordinateLookup(unittest.TestCase):
    def setUp(self):
        self.network = {
            'type': 'FeatureCollection',
            'features': [
                {'type': 'Feature', 'properties': {},
                 'geometry': {'type': 'LineString', 'coordinates': [[0, 0], [1, 0], [1, 1]]}},
                {'type': 'Feature', 'properties': {},
                 'geometry': {'type': 'LineString', 'coordinates': [[1, 1], [2, 1], [2, 2]]}},
            ]
        }
        self.lookup = CoordinateLookup()

    def test_initial_state(self):
        self.assertIsNone(self.lookup.vertices)
        self.assertIsNone(self.lookup.index)
        self.assertFalse(self.lookup.is_built)

    def test_build_index(self):
        vertices, idx = self.lookup.build_index(self.network)
        self.assertIsNotNone(idx)
        self.assertTrue(self.lookup.is_built)
        # Duplicated vertices are kept positionally
        self.assertEqual(vertices, [[0, 0], [1, 0], [1, 1], [1, 1], [2, 1], [2, 2]])

    def test_build_in_constructor(self):
        lookup = CoordinateLookup(self.network)
        self.assertEqual(len(lookup.vertices), 6)

    def test_empty_network(self):
        vertices, idx = self.lookup.build_index({'type': 'FeatureCollection', 'features': []})
        self.assertEqual(vertices, [])
        self.assertIsNone(idx)
        self.assertIsNone(self.lookup.snap_to_nearest_vertex([0, 0]))

    def test_get_vertex(self):
        self.lookup.build_index(self.network)
        self.assertEqual(self.lookup.get_vertex(0), [0, 0])
        self.assertEqual(self.lookup.get_vertex(5), [2, 2])
        self.assertIsNone(self.lookup.get_vertex(-1))
        self.assertIsNone(self.lookup.get_vertex(999))
        self.assertIsNone(self.lookup.get_vertex('invalid'))
        self.assertIsNone(self.lookup.get_vertex(None))
        self.assertIsNone(CoordinateLookup().get_vertex(0))

    def test_snap_before_build(self):
        with self.assertRaises(ResourceError):
            self.lookup.snap_to_nearest_vertex([0, 0])

    def test_snap_coordinate_array(self):
        self.lookup.build_index(self.network)
        snapped = self.lookup.snap_to_nearest_vertex([0.1, 0.1])
        self.assertEqual(snapped['type'], 'Feature')
        self.assertEqual(snapped['geometry']['type'], 'Point')
        self.assertEqual(snapped['geometry']['coordinates'], [0, 0])

    def test_snap_geojson_point(self):
        self.lookup.build_index(self.network)
        point = {'type': 'Feature', 'properties': {},
                 'geometry': {'type': 'Point', 'coordinates': [1.9, 2.2]}}
        snapped = self.lookup.snap_to_nearest_vertex(point)
        self.assertEqual(snapped['geometry']['coordinates'], [2, 2])

    def test_snap_shapely_point(self):
        self.lookup.build_index(self.network)
        snapped = self.lookup.snap_to_nearest_vertex(Point(2.1, 0.9))
        self.assertEqual(snapped['geometry']['coordinates'], [2, 1])

    def test_snap_exact_vertex(self):
        self.lookup.build_index(self.network)
        snapped = self.lookup.snap_to_nearest_vertex([1, 0])
        self.assertEqual(snapped['geometry']['coordinates'], [1, 0])

    def test_snap_malformed(self):
        self.lookup.build_index(self.network)
        for bad in [None, [], [1], 'abc', {'geometry': None}, {'geometry': {'coordinates': [1]}},
                    ['a', 'b'], [float('nan'), 0]]:
            self.assertIsNone(self.lookup.snap_to_nearest_vertex(bad))

if __name__ == '__main__':
    unittest.main()
