from .version import __version__
from .parser import XRobotsTagParser, parse
from .rules.directives import Directive, UnknownDirectiveError, UnparsedValue, get_directive_meaning
