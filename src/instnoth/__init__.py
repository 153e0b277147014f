from .commands import VOCABULARY, Command
from .dag import DependencyResolver, dependency_tree
from .effects import Effect, EffectKind
from .errors import CycleError, InstnothError, ParseError
from .facts import FactProvider, RandomFactProvider
from .interpreter import Interpreter
from .model import Phase, Program
from .parser import parse
from .runner import InstallPlan, RunOptions, load_script, plan, run_plan
from .timing import RealClock, SimulatedClock

__all__ = [
    "VOCABULARY",
    "Command",
    "DependencyResolver",
    "dependency_tree",
    "Effect",
    "EffectKind",
    "CycleError",
    "InstnothError",
    "ParseError",
    "FactProvider",
    "RandomFactProvider",
    "Interpreter",
    "Phase",
    "Program",
    "parse",
    "InstallPlan",
    "RunOptions",
    "load_script",
    "plan",
    "run_plan",
    "RealClock",
    "SimulatedClock",
]
