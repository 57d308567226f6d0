# tycoonengine: incremental economy engine & headless balance simulation

from tycoonengine import formulas
from tycoonengine.investment import (
    InvestmentDef,
    InvestmentState,
    InvestmentStatus,
    InvestmentStatusView,
)
from tycoonengine.specialist import SpecialistKind, SpecialistState
from tycoonengine.upgrade import UpgradeDef
from tycoonengine.achievement import AchievementDef
from tycoonengine.prestige import PrestigePreview, PrestigeResult
from tycoonengine.definition import GameDefinition, GameConfig
from tycoonengine.state import EconomyState
from tycoonengine.pipeline import ProductionPipeline
from tycoonengine.subsystem import Subsystem, SimulationProxy
from tycoonengine.production import ProductionEngine
from tycoonengine.specialist_engine import SpecialistEngine
from tycoonengine.progression import ProgressionEngine
from tycoonengine.offline import OfflineSimulator
from tycoonengine.clock import Clock, SystemClock, ManualClock
from tycoonengine.persistence import (
    SnapshotError,
    Store,
    MemoryStore,
    FileStore,
    encode_state,
    decode_state,
)
from tycoonengine.purchase import PurchaseKind, PurchaseOption
from tycoonengine.runtime import GameRuntime
from tycoonengine.scheduler import Scheduler
from tycoonengine.terminal import TerminalCondition, Terminal, SimulationContext
from tycoonengine.strategy import (
    Strategy,
    GreedyCheapest,
    PriorityList,
    CustomStrategy,
)
from tycoonengine.metrics import MetricsCollector
from tycoonengine.simulation import Simulation
from tycoonengine.report import SimulationReport, build_report
from tycoonengine.formatting import format_text_report

__all__ = [
    # Formulas
    "formulas",
    # Data model
    "InvestmentDef",
    "InvestmentState",
    "InvestmentStatus",
    "InvestmentStatusView",
    "SpecialistKind",
    "SpecialistState",
    "UpgradeDef",
    "AchievementDef",
    "PrestigePreview",
    "PrestigeResult",
    # Definition
    "GameDefinition",
    "GameConfig",
    # State
    "EconomyState",
    # Pipeline
    "ProductionPipeline",
    # Engines
    "Subsystem",
    "SimulationProxy",
    "ProductionEngine",
    "SpecialistEngine",
    "ProgressionEngine",
    "OfflineSimulator",
    # Clock
    "Clock",
    "SystemClock",
    "ManualClock",
    # Persistence
    "SnapshotError",
    "Store",
    "MemoryStore",
    "FileStore",
    "encode_state",
    "decode_state",
    # Runtime
    "PurchaseKind",
    "PurchaseOption",
    "GameRuntime",
    "Scheduler",
    # Terminal
    "TerminalCondition",
    "Terminal",
    "SimulationContext",
    # Strategy
    "Strategy",
    "GreedyCheapest",
    "PriorityList",
    "CustomStrategy",
    # Simulation
    "MetricsCollector",
    "Simulation",
    "SimulationReport",
    "build_report",
    # Formatting
    "format_text_report",
]
