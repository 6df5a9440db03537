import itertools as it, operator as op, functools as ft

from . import utils as u, types as t


@u.attr_struct(vals_to_attrs=True)
class EngineConf:

	# How wait for the next departure is calculated, when arriving after the first one.
	# "reference" - time since the last multiple of service frequency.
	# "next-departure" - actual wait until next first + k*freq departure.
	wait_model = 'reference'

	log_progress_for = None # or a set/list of prefixes
	log_progress_steps = 30


wait_models = 'reference', 'next-departure'

def edge_cost(dts_arr, travel, freq, first, wait_model='reference'):
	'''Time it takes to get through the edge (wait + ride),
		arriving to its tail station at dts_arr clock time.
		Edges with zero travel time or frequency are inert and cost nothing.'''
	if wait_model not in wait_models:
		raise ValueError('Unknown wait model: {!r}'.format(wait_model))
	if travel == 0 or freq == 0: return 0
	if dts_arr < first: wait = first - dts_arr
	elif dts_arr == first: wait = 0
	elif wait_model == 'reference': wait = abs((dts_arr // freq) * freq - dts_arr)
	else: wait = -(dts_arr - first) % freq
	return wait + travel


def find_next_to_process(times, processed):
	'''Return index of unprocessed station with the lowest time, or -1 if there are none.
		Last one in the index order is picked out of several equal ones.'''
	t_min, n_min = u.inf, -1
	for n, (dts, done) in enumerate(zip(times, processed)):
		if not done and dts <= t_min: t_min, n_min = dts, n
	return n_min


def label_setting_search(n_max, source, edge_cost_func, progress=None):
	'''Dijkstra-style search over stations [0, n_max),
			running exactly n_max-1 rounds of select-min/relax-edges.
		edge_cost_func(a, b, dts_a) should return cost of edge a->b when
			traveler has time label dts_a at a, or None if there is no such edge.
		Returns (times, prev) lists, with u.inf for unreachable stations.'''
	times, prev, processed = [u.inf] * n_max, [None] * n_max, [False] * n_max
	times[source] = 0

	for count in range(n_max - 1):
		a = find_next_to_process(times, processed)
		processed[a] = True
		if progress: progress.send(['station={} time={}', a, times[a]])
		if times[a] == u.inf: continue # nothing reachable from here

		for b in range(n_max):
			if processed[b]: continue
			cost = edge_cost_func(a, b, times[a])
			if cost is None: continue
			if times[a] + cost < times[b]: times[b], prev[b] = times[a] + cost, a

	return times, prev


def _travel_time_search( src, dst, dts_start,
		travel, first, freq, wait_model='reference', progress=None ):
	n = t.check_matrix(travel, name='travel')
	t.check_matrix(first, n, name='first')
	t.check_matrix(freq, n, name='freq')
	t.check_station(src, n)
	t.check_station(dst, n)
	if dts_start < 0: raise ValueError('Negative journey start time: {}'.format(dts_start))
	if wait_model not in wait_models:
		raise ValueError('Unknown wait model: {!r}'.format(wait_model))

	def service_cost(a, b, dts_a):
		if travel[a][b] == 0: return
		return edge_cost( dts_a + dts_start,
			travel[a][b], freq[a][b], first[a][b], wait_model )

	return label_setting_search(n, src, service_cost, progress=progress)


def shortest_travel_time( src, dst, dts_start,
		travel, first, freq, wait_model='reference' ):
	'''Shortest time to get from src to dst station, starting journey at dts_start
			clock time, with travel/first/freq NxN matrices describing scheduled services.
		Returns u.inf if dst cannot be reached from src.'''
	times, prev = _travel_time_search(
		src, dst, dts_start, travel, first, freq, wait_model )
	return times[dst]


def shortest_path_distances(graph, source, progress=None):
	'''Shortest distances from source to all stations in a fixed-weight
			adjacency matrix, where graph[u][v] != 0 is an edge with that weight.
		Unreachable stations get u.inf value.'''
	n = t.check_matrix(graph, name='graph')
	t.check_station(source, n)
	weight = lambda a, b, dts_a: graph[a][b] or None
	times, prev = label_setting_search(n, source, weight, progress=progress)
	return times


def timer(self_or_func, func=None, *args, **kws):
	'Calculation call wrapper for timer/progress logging.'
	if not func: return lambda s,*a,**k: s.timer_wrapper(self_or_func, s, *a, **k)
	return self_or_func.timer_wrapper(func, *args, **kws)


class RoutingEngine:

	network = static_network = None

	def __init__(self, network=None, static_network=None, conf=None, timer_func=None):
		'''Creates routing engine for time-dependent Network and/or fixed-weight StaticNetwork.
			If only Network is specified, its travel matrix is used for fixed-weight queries.'''
		if network is None and static_network is None:
			raise t.NetworkError('At least one network must be specified')
		self.conf, self.log = conf or EngineConf(), u.get_logger('sched')
		self.timer_wrapper = timer_func if timer_func else lambda f,*a,**k: f(*a,**k)
		if self.conf.wait_model not in wait_models:
			raise ValueError('Unknown wait model: {!r}'.format(self.conf.wait_model))
		self.network, self.static_network = network, static_network
		if static_network is None:
			self.static_network = t.StaticNetwork(network.travel)

	@u.coroutine
	def progress_iter(self, prefix, n_max, steps=None, n=0):
		'Progress logging helper coroutine for long calculations.'
		prefix_set = self.conf.log_progress_for
		if not prefix_set or prefix not in prefix_set:
			while True: yield # dry-run
		if not steps: steps = self.conf.log_progress_steps
		steps = min(n_max, steps)
		step_n = steps and n_max / steps
		msg_tpl = '[{{}}] Step {{:>{0}.0f}} / {{:{0}d}}{{}}'.format(len(str(steps)))
		while True:
			dn_msg = yield
			if isinstance(dn_msg, tuple): dn, msg = dn_msg
			elif isinstance(dn_msg, int): dn, msg = dn_msg, None
			else: dn, msg = 1, dn_msg
			n += dn
			if n == dn or n % step_n < 1:
				if msg:
					if not isinstance(msg, str): msg = msg[0].format(*msg[1:])
					msg = ': {}'.format(msg)
				self.log.debug(msg_tpl, prefix, n / step_n, steps, msg or '')

	def _search(self, src, dst, dts_start):
		if self.network is None:
			raise t.NetworkError('No time-dependent network to run query on')
		net = self.network
		return _travel_time_search(
			src, dst, dts_start, net.travel, net.first, net.freq,
			wait_model=self.conf.wait_model,
			progress=self.progress_iter('search', max(1, net.size - 1)) )


	@timer
	def query_travel_time(self, src, dst, dts_start=0):
		'Shortest travel time from src to dst station, or u.inf if unreachable.'
		times, prev = self._search(src, dst, dts_start)
		self.log.debug( 'Travel time {} -> {}'
			' (start={}): {}', src, dst, dts_start, times[dst] )
		return times[dst]

	@timer
	def query_journey(self, src, dst, dts_start=0):
		'''Build Journey with all the legs of the
			shortest route from src to dst, or return None if it's unreachable.'''
		times, prev = self._search(src, dst, dts_start)
		if times[dst] == u.inf:
			self.log.debug('No route {} -> {} (start={})', src, dst, dts_start)
			return

		legs, b = list(), dst
		while b != src:
			legs.append((prev[b], b))
			b = prev[b]

		journey = t.Journey(dts_start)
		for a, b in reversed(legs):
			srv, dts_arr = self.network.service(a, b), times[a] + dts_start
			cost = edge_cost(dts_arr, srv.travel, srv.freq, srv.first, self.conf.wait_model)
			if not cost: journey.append(a, b, dts_arr, 0, 0) # inert edge
			else: journey.append(a, b, dts_arr, cost - srv.travel, srv.travel)
		assert journey.duration == times[dst], [journey, times[dst]]
		return journey

	@timer
	def query_distances(self, source):
		'Shortest distances from source to all stations in a fixed-weight network.'
		net = self.static_network
		times = shortest_path_distances( net.weights, source,
			progress=self.progress_iter('search', max(1, net.size - 1)) )
		self.log.debug('Distances from {}: {}', source, times)
		return times
