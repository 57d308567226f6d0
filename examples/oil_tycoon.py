"""Oil tycoon reference game: eight properties from gas royalties to Saudi fields."""
from __future__ import annotations

from tycoonengine.achievement import AchievementDef
from tycoonengine.definition import GameConfig, GameDefinition
from tycoonengine.investment import InvestmentDef
from tycoonengine.upgrade import UpgradeDef

# (id, display name, base cost, base duration ms)
_INVESTMENTS = [
    ("gas_royalties", "Gas Royalties", 2, 2_000),
    ("oil_royalties", "Oil Royalties", 15, 4_000),
    ("gas_well", "Gas Well", 130, 10_000),
    ("oil_well", "Oil Well", 1_100, 20_000),
    ("oil_sands", "Oil Sands", 10_000, 50_000),
    ("shale_play", "Shale Play", 90_000, 150_000),
    ("omani_field", "Omani Field", 850_000, 600_000),
    ("saudi_field", "Saudi Field", 7_000_000, 2_400_000),
]


def define_game() -> GameDefinition:
    return GameDefinition(
        config=GameConfig(name="Oil Tycoon"),
        investments=[
            InvestmentDef(
                id=iid,
                display_name=name,
                base_cost=cost,
                cost_growth=1.15,
                base_duration_ms=duration,
            )
            for iid, name, cost, duration in _INVESTMENTS
        ],
        upgrades=[
            UpgradeDef(
                "0", "Direct Deposit", cost=75_000, multiplier=3, target=0,
                description="Gas Royalties profits x 3",
            ),
            UpgradeDef(
                "1", "New Pumps", cost=250_000, multiplier=3, target=1,
                description="Oil Royalties profits x 3",
            ),
            UpgradeDef(
                "2", "Fracking", cost=1_000_000, multiplier=3, target=2,
                description="Gas Well profits x 3",
            ),
            UpgradeDef(
                "3", "Drilling Rigs", cost=5_000_000, multiplier=3, target=3,
                description="Oil Well profits x 3",
            ),
            UpgradeDef(
                "8", "In house Refining", cost=492_075_000, multiplier=3,
                description="All properties profits x 3",
            ),
            UpgradeDef(
                "9", "Global Contracts", cost=5_000_000_000, multiplier=5,
                description="All properties profits x 5",
            ),
        ],
        achievements=[
            AchievementDef(
                "0", "Gas Royalty Investor: Gas Royalties level 10, profits x 3",
                threshold=10, reward=3, target=0,
            ),
            AchievementDef(
                "1", "Oil Royalty Investor: Oil Royalties level 10, profits x 3",
                threshold=10, reward=3, target=1,
            ),
            AchievementDef(
                "2", "Gas Baron: Gas Royalties level 25, speed x 2",
                threshold=25, reward=0.5, target=0,
            ),
            AchievementDef(
                "3", "Oil Baron: Oil Royalties level 25, speed x 2",
                threshold=25, reward=0.5, target=1,
            ),
            AchievementDef(
                "4", "First Hundred: Gas Royalties level 100, profits x 10",
                threshold=100, reward=10, target=0,
            ),
            AchievementDef(
                "100", "Diversification: all properties level 50, profits x 2",
                threshold=50, reward=2,
            ),
        ],
    )
