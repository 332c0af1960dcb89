# Import all models to ensure they are registered with the database
from .users import User
from .seasons import Season
from .teams import Team
from .players import Player
from .games import Game
from .stats import BattingStats, PitchingStats
from .plate_appearances import PlateAppearance, PlayerGameTotals
from .messages import Message, ChannelRead
from .announcements import Announcement
from .availability import Availability
from .tokens import PasswordResetToken, EmailVerificationToken

# Dependency order: create_tables handles it, drop_tables needs it reversed
ALL_MODELS = [
    User,
    Season,
    Team,
    Player,
    Game,
    BattingStats,
    PitchingStats,
    PlateAppearance,
    PlayerGameTotals,
    Message,
    ChannelRead,
    Announcement,
    Availability,
    PasswordResetToken,
    EmailVerificationToken,
]

__all__ = [
    'User',
    'Season',
    'Team',
    'Player',
    'Game',
    'BattingStats',
    'PitchingStats',
    'PlateAppearance',
    'PlayerGameTotals',
    'Message',
    'ChannelRead',
    'Announcement',
    'Availability',
    'PasswordResetToken',
    'EmailVerificationToken',
    'ALL_MODELS',
]
