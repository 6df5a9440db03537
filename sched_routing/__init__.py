import itertools as it, operator as op, functools as ft
from pathlib import Path
import time

import yaml

from . import engine, vis, utils as u, types as t


def calc_timer(func, *args, log=u.get_logger('sched.timer'), timer_name=None, **kws):
	if not timer_name:
		func_base = func if not isinstance(func, ft.partial) else func.func
		timer_name = '.'.join([func_base.__module__.strip('__'), func_base.__qualname__])
	log.debug('[{}] Starting...', timer_name)
	td = time.monotonic()
	data = func(*args, **kws)
	td = time.monotonic() - td
	log.debug('[{}] Finished in: {:.3f}s', timer_name, td)
	return data


def sample_networks():
	'''Returns (network, static_network) tuple with 9-station sample data,
		where frequencies are 5min and all first departures are at 1min offset.'''
	travel = [
		[ 0,  4,  0,  0,  0,  0,  0,  8,  0],
		[ 4,  0,  8,  0,  0,  0,  0, 11,  0],
		[ 0,  8,  0,  7,  0,  4,  0,  0,  2],
		[ 0,  0,  7,  0,  9, 14,  0,  0,  0],
		[ 0,  0,  0,  9,  0, 10,  0,  0,  0],
		[ 0,  0,  4, 14, 10,  0,  2,  0,  0],
		[ 0,  0,  0,  0,  0,  2,  0,  1,  6],
		[ 8, 11,  0,  0,  0,  0,  1,  0,  7],
		[ 0,  0,  2,  0,  0,  0,  6,  7,  0] ]
	first = list(list(int(bool(v)) for v in row) for row in travel)
	freq = list(list(5 * int(bool(v)) for v in row) for row in travel)
	return t.Network(travel, first, freq), t.StaticNetwork(travel)


def load_networks(src, log=u.get_logger('sched.init')):
	'''Load (network, static_network) from YAML file path or stream,
			with "network" mapping of travel/first/freq matrices and/or "static" weights.
		Either one of the returned networks can be None, but not both.'''
	if isinstance(src, (str, Path)):
		with open(str(src)) as src_file: data = yaml.safe_load(src_file)
	else: data = yaml.safe_load(src)
	if not isinstance(data, dict):
		raise t.NetworkError('Network data must be a mapping, not {}'.format(type(data).__name__))

	network, static_network = data.get('network'), data.get('static')
	if network is None and static_network is None:
		raise t.NetworkError('Neither "network" nor "static" mappings found in data')
	if network is not None: network = t.Network.from_mapping(network)
	if static_network is not None: static_network = t.StaticNetwork.from_mapping(static_network)
	log.debug( 'Loaded networks: time-dependent={}, static={}',
		network and network.size, static_network and static_network.size )
	return network, static_network


def init_router(path=None, conf=None, timer_func=None):
	'Create RoutingEngine from YAML file at path or with sample data if path is None.'
	if path is None: network, static_network = sample_networks()
	else: network, static_network = load_networks(path)
	return engine.RoutingEngine(
		network, static_network, conf=conf, timer_func=timer_func )
