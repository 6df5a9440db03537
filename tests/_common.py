import itertools as it, operator as op, functools as ft
from collections import ChainMap, OrderedDict
from collections.abc import Mapping
from pathlib import Path
import os, sys, types, re

import yaml # PyYAML module is required for tests

path_project = Path(__file__).parent.parent
sys.path.insert(1, str(path_project))
import sched_routing as sr

verbose = os.environ.get('SCHED_DEBUG')
if verbose:
	sr.u.logging.basicConfig(
		format='%(asctime)s :: %(name)s %(levelname)s :: %(message)s',
		datefmt='%Y-%m-%d %H:%M:%S', level=sr.u.logging.DEBUG )



class dmap(ChainMap):

	maps = None

	def __init__(self, *maps, **map0):
		maps = list((v if not isinstance( v,
			(types.GeneratorType, list, tuple) ) else OrderedDict(v)) for v in maps)
		if map0 or not maps: maps = [map0] + maps
		super(dmap, self).__init__(*maps)

	def __repr__(self):
		return '<{} {:x} {}>'.format(
			self.__class__.__name__, id(self), repr(self._asdict()) )

	def _asdict(self):
		items = dict()
		for k, v in self.items():
			if isinstance(v, self.__class__): v = v._asdict()
			items[k] = v
		return items

	def __getitem__(self, k):
		k_maps = list()
		for m in self.maps:
			if k in m:
				if isinstance(m[k], Mapping): k_maps.append(m[k])
				elif not (m[k] is None and k_maps): return m[k]
		if not k_maps: raise KeyError(k)
		return self.__class__(*k_maps)

	def __getattr__(self, k):
		try: return self[k]
		except KeyError: raise AttributeError(k)


def yaml_load(stream, dict_cls=OrderedDict, loader_cls=yaml.SafeLoader):
	if not hasattr(yaml_load, '_cls'):
		class CustomLoader(loader_cls): pass
		def construct_mapping(loader, node):
			loader.flatten_mapping(node)
			return dict_cls(loader.construct_pairs(node))
		CustomLoader.add_constructor(
			yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG, construct_mapping )
		# Do not auto-resolve dates/timestamps or sexagesimal ints, as PyYAML does that badly
		res_map = CustomLoader.yaml_implicit_resolvers = CustomLoader.yaml_implicit_resolvers.copy()
		res_int = list('-+0123456789')
		for c in res_int: del res_map[c]
		CustomLoader.add_implicit_resolver(
			'tag:yaml.org,2002:int',
			re.compile(r'''^(?:[-+]?0b[0-1_]+
				|[-+]?0[0-7_]+
				|[-+]?(?:0|[1-9][0-9_]*)
				|[-+]?0x[0-9a-fA-F_]+)$''', re.X), res_int )
		yaml_load._cls = CustomLoader
	return yaml.load(stream, yaml_load._cls)

def load_test_data(path_dir, path_stem, name):
	'Load test data from specified YAML file and return as dmap object.'
	with (path_dir / '{}.test.{}.yaml'.format(path_stem, name)).open() as src:
		return dmap(yaml_load(src))


def struct_from_val(val, cls, as_tuple=False):
	if isinstance(val, (tuple, list)): val = cls(*val)
	elif isinstance(val, (dmap, dict, OrderedDict)): val = cls(**val)
	else: raise ValueError(val)
	return val if not as_tuple else sr.u.attr.astuple(val)

@sr.u.attr_struct
class TestGoal:
	src = sr.u.attr_init()
	dst = sr.u.attr_init()
	dts_start = sr.u.attr_init(0)


class ProgressCollector:
	'Stand-in for progress-logging coroutine, recording all sent messages.'
	def __init__(self): self.msgs = list()
	def send(self, msg): self.msgs.append(msg)
	@property
	def stations(self): return list(map(op.itemgetter(1), self.msgs))


def network_from_test_data(test_data, name):
	if name == 'sample': return sr.sample_networks()[0]
	return sr.t.Network.from_mapping(test_data.networks[name])

def static_network_from_test_data(test_data, name):
	if name == 'sample': return sr.sample_networks()[1]
	return sr.t.StaticNetwork.from_mapping(test_data.static[name])
