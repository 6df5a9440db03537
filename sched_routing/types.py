### Routing engine data types: networks and query results

import itertools as it, operator as op, functools as ft
from collections import namedtuple
from collections.abc import Mapping

from . import utils as u


class NetworkError(ValueError): pass


def check_matrix(matrix, n=None, name='matrix'):
	'''Check that matrix is a non-empty square list-of-rows, and of size n, if specified.
		Returns matrix dimension.'''
	if n is None: n = len(matrix)
	if not n: raise NetworkError('Empty {}'.format(name))
	if len(matrix) != n:
		raise NetworkError('{} has {} rows, expected {}'.format(name, len(matrix), n))
	for row_n, row in enumerate(matrix):
		if len(row) != n:
			raise NetworkError( '{} row {} has {} columns,'
				' expected {}'.format(name, row_n, len(row), n) )
	return n


def check_station(idx, n):
	if not 0 <= idx < n:
		raise IndexError('Station index out of range [0, {}): {!r}'.format(n, idx))
	return idx


### Time-dependent network

Service = namedtuple('Service', 'travel first freq')

@u.attr_struct
class Network:
	'''Scheduled-service network over N stations, with three NxN matrices:
			travel[u][v] - ride duration from u to v,
			first[u][v] - clock time of the first departure from u towards v,
			freq[u][v] - interval between successive departures.
		Edge (u,v) exists iff travel[u][v] != 0,
			first/freq values are only meaningful for such edges.'''

	keys = 'travel first freq'

	def __attrs_post_init__(self):
		n = check_matrix(self.travel, name='travel')
		check_matrix(self.first, n, name='first')
		check_matrix(self.freq, n, name='freq')

	@classmethod
	def from_mapping(cls, data):
		try: return cls(*op.itemgetter('travel', 'first', 'freq')(data))
		except KeyError as err:
			raise NetworkError('Missing network matrix: {}'.format(err.args[0])) from None

	@property
	def size(self): return len(self.travel)

	def check_station(self, idx): return check_station(idx, self.size)

	def service(self, a, b):
		return Service(self.travel[a][b], self.first[a][b], self.freq[a][b])

	def edges(self):
		for a, b in it.product(range(self.size), repeat=2):
			if self.travel[a][b] != 0: yield a, b, self.service(a, b)

	def __len__(self): return self.size


### Fixed-weight network

@u.attr_struct
class StaticNetwork:
	'Fixed-weight network, edge (u,v) exists iff weights[u][v] != 0.'

	keys = 'weights'

	def __attrs_post_init__(self):
		check_matrix(self.weights, name='weights')

	@classmethod
	def from_mapping(cls, data):
		if isinstance(data, Mapping):
			try: data = data['weights']
			except KeyError: raise NetworkError('Missing weights matrix') from None
		return cls(data)

	@property
	def size(self): return len(self.weights)

	def check_station(self, idx): return check_station(idx, self.size)

	def edges(self):
		for a, b in it.product(range(self.size), repeat=2):
			if self.weights[a][b] != 0: yield a, b, self.weights[a][b]

	def __len__(self): return self.size


### Query results

# dts_arr is the absolute clock time of arrival to src station
JourneySeg = namedtuple('JSeg', 'src dst dts_arr wait travel')

@u.attr_struct(slots=False, repr=False)
class Journey:
	dts_start = u.attr_init()
	segments = u.attr_init(list)

	def append(self, *seg_args, **seg_kws):
		self.segments.append(JourneySeg(*seg_args, **seg_kws))
		return self

	@property
	def duration(self):
		return sum(seg.wait + seg.travel for seg in self.segments)

	@property
	def dts_arr(self): return self.dts_start + self.duration

	@property
	def stations(self):
		if not self.segments: return list()
		return [self.segments[0].src] + list(map(op.attrgetter('dst'), self.segments))

	def __len__(self): return len(self.segments)
	def __iter__(self): return iter(self.segments)

	def __repr__(self):
		return '<Journey[ {} ] {}>'.format(
			' - '.join(map(str, self.stations)), u.dts_format(self.duration) )

	def pretty_print(self, label_func=str, dts_format_func=None, indent=0, **print_kws):
		if not dts_format_func: dts_format_func = u.dts_format
		p = lambda tpl,*a,**k: print(' '*indent + tpl.format(*a,**k), **print_kws)
		p( 'Journey (departure: {}, arrival: {}, legs: {}, duration: {}):',
			dts_format_func(self.dts_start), dts_format_func(self.dts_arr),
			len(self.segments), self.duration )
		for seg in self.segments:
			p( '  {} -> {} (at station: {}, wait: {}, ride: {})',
				label_func(seg.src), label_func(seg.dst),
				dts_format_func(seg.dts_arr), seg.wait, seg.travel )
