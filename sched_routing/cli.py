import itertools as it, operator as op, functools as ft
from pathlib import Path
import sys, logging

import yaml

import sched_routing as sr


def main(args=None):
	conf_engine = sr.engine.EngineConf(log_progress_for={'search'})

	import argparse
	parser = argparse.ArgumentParser(
		description='Fastest route between stations of a scheduled transit network.')
	parser.add_argument('-n', '--network', metavar='path',
		help='Path to YAML file with "network" (travel/first/freq matrices)'
				' and/or "static" (weights matrix) mappings.'
			' Use "-" to read it from stdin. Built-in 9-station sample data is used if omitted.')

	group = parser.add_argument_group('Misc/debug options')
	group.add_argument('--dot-for-network', metavar='path',
		help='Dump network graph (in graphviz dot format) to a specified file and exit.')
	group.add_argument('--dot-opts', metavar='yaml-data',
		help='Options for graphviz graph/nodes/edges to use with'
			' --dot-for-network, as a YAML mapping. Example: {graph: {rankdir: LR}}')
	group.add_argument('--engine-conf', metavar='yaml-data',
		help='Override values for EngineConf as a YAML mapping.'
			' Example: {wait_model: next-departure}')
	group.add_argument('--debug', action='store_true', help='Verbose operation mode.')

	cmds = parser.add_subparsers(title='Commands', dest='call')

	cmd = cmds.add_parser('query-travel-time',
		help='Find shortest travel time between two stations of a time-dependent network.')
	cmd.add_argument('station_from', help='Station index or letter label (A-Q) to start from.')
	cmd.add_argument('station_to', help='Station index or letter label (A-Q) to travel to.')
	cmd.add_argument('day_time', nargs='?', default='0',
		help='Clock time to start journey at, either as'
			' minutes from start of the service day or H:MM. Default: %(default)s')

	cmd = cmds.add_parser('query-journey',
		help='Same as query-travel-time, but print all legs of the route.')
	cmd.add_argument('station_from', help='Station index or letter label (A-Q) to start from.')
	cmd.add_argument('station_to', help='Station index or letter label (A-Q) to travel to.')
	cmd.add_argument('day_time', nargs='?', default='0',
		help='Clock time to start journey at, either as'
			' minutes from start of the service day or H:MM. Default: %(default)s')

	cmd = cmds.add_parser('query-distances',
		help='Print shortest distances from station to all others in a fixed-weight network.')
	cmd.add_argument('station_from', help='Station index or letter label (A-Q) to start from.')

	opts = parser.parse_args(sys.argv[1:] if args is None else args)

	logging.basicConfig(
		format='%(asctime)s :: %(name)s %(levelname)s :: %(message)s',
		datefmt='%Y-%m-%d %H:%M:%S',
		level=logging.DEBUG if opts.debug else logging.WARNING )

	if opts.engine_conf:
		for k, v in (yaml.safe_load(opts.engine_conf) or dict()).items():
			if not hasattr(conf_engine, k):
				parser.error('Unrecognized engine conf option: {!r} (value: {!r})'.format(k, v))
			setattr(conf_engine, k, v)
	if conf_engine.wait_model not in sr.engine.wait_models:
		parser.error('Unrecognized wait_model value: {!r}'.format(conf_engine.wait_model))

	src = opts.network
	if src == '-': src = sys.stdin
	elif src: src = Path(src)
	if src: router = sr.engine.RoutingEngine(
		*sr.load_networks(src), conf=conf_engine, timer_func=sr.calc_timer )
	else: router = sr.init_router(conf=conf_engine, timer_func=sr.calc_timer)

	if opts.dot_for_network:
		dot_opts = yaml.safe_load(opts.dot_opts) if opts.dot_opts else dict()
		with sr.u.safe_replacement(opts.dot_for_network) as dst:
			sr.vis.dot_for_network(router.network or router.static_network, dst, dot_opts=dot_opts)
		return

	def get_station(label):
		try: return sr.vis.station_from_label(label)
		except ValueError as err: parser.error(str(err))

	if opts.call in ['query-travel-time', 'query-journey'] and router.network is None:
		parser.error('Command {} requires time-dependent "network" data'.format(opts.call))

	if opts.call == 'query-travel-time':
		a, b = map(get_station, [opts.station_from, opts.station_to])
		dts_start = sr.u.dts_parse(opts.day_time)
		total = router.query_travel_time(a, b, dts_start)
		sr.vis.print_travel_time(a, b, dts_start, total)

	elif opts.call == 'query-journey':
		a, b = map(get_station, [opts.station_from, opts.station_to])
		journey = router.query_journey(a, b, sr.u.dts_parse(opts.day_time))
		if journey is None:
			print('No route from {} to {}'.format(*map(sr.vis.station_label, [a, b])))
			return 1
		journey.pretty_print(label_func=sr.vis.station_label)

	elif opts.call == 'query-distances':
		sr.vis.print_distances(router.query_distances(get_station(opts.station_from)))

	elif not opts.call: parser.error('No command specified')
	else: parser.error('Action not implemented: {}'.format(opts.call))

if __name__ == '__main__': sys.exit(main())
