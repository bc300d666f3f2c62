# core/__init__.py

# Import the engine modules to make them easily accessible
from .utils import setup_logging, normalize_target
from .exceptions import BusterError, ConfigurationError, InvalidTargetError, ResourceError, TransportError, HeaderParseError
from .modes import Mode
from .templater import PLACEHOLDER, RequestSpec, get_templater, derive_template, derive_request_spec
from .classifier import Outcome, ReportDecision, ResponseClassifier, Severity
from .dispatcher import ConcurrencyBudget, Dispatcher
from .wordlists import load_wordlist, load_extensions, load_user_agents, expand_words, parse_headers
# core.coordinator is not re-exported here: it depends on reports.reporter,
# which itself imports from core.
