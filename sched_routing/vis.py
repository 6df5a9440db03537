# Output helpers - text reports and graphviz dumps, mostly useful for debugging

import itertools as it, operator as op, functools as ft
import string, contextlib

from . import utils as u


print_fmt = lambda tpl, *a, file=None, end='\n', **k:\
	print(tpl.format(*a,**k), file=file, end=end)

dot_str = lambda n: '"{}"'.format(n.replace('"', '\\"'))


station_labels = string.ascii_uppercase[:17] # A-Q

def station_label(station):
	'Convert station index into a letter, returning "?" for ones without such label.'
	if not isinstance(station, int) or not 0 <= station < len(station_labels): return '?'
	return station_labels[station]

def station_from_label(label):
	'Inverse of station_label, also accepting plain index strings.'
	label = label.strip()
	if label.isdigit(): return int(label)
	try: return station_labels.index(label.upper())
	except ValueError: raise ValueError('Unrecognized station label: {!r}'.format(label)) from None


def print_distances(times, file=None):
	print_fmt('Vertex Distances (time) from Source', file=file)
	for n, dts in enumerate(times):
		print_fmt('{}: {} minutes', n, dts if dts != u.inf else 'inf', file=file)

def print_travel_time(src, dst, dts_start, total, file=None):
	print_fmt( 'Start: {} End: {} Start time: {} Total time: {}',
		station_label(src), station_label(dst),
		dts_start, total if total != u.inf else 'inf', file=file )


@contextlib.contextmanager
def dot_graph(dst, dot_opts, indent=2):
	print_fmt('digraph {{', file=dst)
	if isinstance(indent, int): indent = ' '*indent
	p = lambda tpl, *a, end='\n', **k:\
		print_fmt(indent + tpl, *a, file=dst, end=end, **k)
	p('### Defaults')
	for t, opts in (dot_opts or dict()).items():
		p('{} [ {} ]'.format(t, ', '.join('{}={}'.format(k, v) for k, v in opts.items())))
	yield p
	print_fmt('}}', file=dst)


def dot_for_network(network, dst, dot_opts=None, label_func=station_label):
	'''Dump Network or StaticNetwork as a digraph,
		with edges labelled by travel/first/freq or weight values.'''
	with dot_graph(dst, dot_opts) as p:

		p('')
		p('### Labels')
		for n in range(network.size):
			p('{} [label={}]', dot_str('st-{}'.format(n)), dot_str(
				'{} [{}]'.format(label_func(n), n) if label_func(n) != '?' else str(n) ))

		p('')
		p('### Edges')
		for a, b, edge in network.edges():
			if isinstance(edge, tuple):
				label = 'travel={0.travel} first={0.first} freq={0.freq}'.format(edge)
			else: label = str(edge)
			p( '{} -> {} [label={}]',
				*map(dot_str, ['st-{}'.format(a), 'st-{}'.format(b), label]) )
