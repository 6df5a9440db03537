import itertools as it, operator as op, functools as ft
from pathlib import Path
import unittest

from . import _common as c


class SimpleNetworkTests(unittest.TestCase):

	@classmethod
	def setUpClass(cls):
		path_file = Path(__file__)
		cls.test_data = c.load_test_data(path_file.parent, path_file.stem, 'networks')

	def init_router(self, network_name, conf=None):
		network = c.network_from_test_data(self.test_data, network_name)
		return c.sr.engine.RoutingEngine(network, conf=conf, timer_func=c.sr.calc_timer)

	def test_travel_times(self):
		for test_name, test in self.test_data.queries.items():
			with self.subTest(test_name):
				router = self.init_router(test.network)
				goal = c.struct_from_val(test.goal, c.TestGoal)
				self.assertEqual(
					router.query_travel_time(goal.src, goal.dst, goal.dts_start), test.time )

				net = router.network
				self.assertEqual(c.sr.engine.shortest_travel_time(
					goal.src, goal.dst, goal.dts_start,
					net.travel, net.first, net.freq ), test.time)

	def test_journeys(self):
		for test_name, test in self.test_data.queries.items():
			with self.subTest(test_name):
				router = self.init_router(test.network)
				goal = c.struct_from_val(test.goal, c.TestGoal)
				journey = router.query_journey(goal.src, goal.dst, goal.dts_start)
				if test.time == c.sr.u.inf:
					self.assertIsNone(journey)
					continue
				self.assertEqual(journey.duration, test.time)
				self.assertEqual(journey.dts_arr, goal.dts_start + test.time)
				if 'journey' not in test: continue
				self.assertEqual(
					list(map(list, journey)),
					list(map(list, test.journey)) )

	def test_distances(self):
		for test_name, test in self.test_data.distances.items():
			with self.subTest(test_name):
				network = c.static_network_from_test_data(self.test_data, test.static)
				router = c.sr.engine.RoutingEngine(static_network=network)
				self.assertEqual(router.query_distances(test.source), test.times)
				self.assertEqual( c.sr.engine.shortest_path_distances(
					network.weights, test.source ), test.times )

	def test_wait_models(self):
		for test_name, test in self.test_data.wait_models.items():
			with self.subTest(test_name):
				conf = c.sr.engine.EngineConf(wait_model=test.wait_model)
				router = self.init_router(test.network, conf=conf)
				goal = c.struct_from_val(test.goal, c.TestGoal)
				self.assertEqual(
					router.query_travel_time(goal.src, goal.dst, goal.dts_start), test.time )
				journey = router.query_journey(goal.src, goal.dst, goal.dts_start)
				self.assertEqual(journey.duration, test.time)


def load_tests(loader, tests, pattern):
	return loader.loadTestsFromTestCase(SimpleNetworkTests)
