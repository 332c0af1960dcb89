# ------------------------------- Roles ------------------------------- #
ROLE_PLAYER = 'player'
ROLE_MANAGER = 'manager'
ROLE_ADMIN = 'admin'
ROLE_COMMISSIONER = 'commissioner'

USER_ROLES = (ROLE_PLAYER, ROLE_MANAGER, ROLE_ADMIN, ROLE_COMMISSIONER)
ADMIN_ROLES = (ROLE_ADMIN, ROLE_COMMISSIONER)
MANAGER_ROLES = (ROLE_MANAGER, ROLE_ADMIN, ROLE_COMMISSIONER)


# ------------------------------- Games ------------------------------- #
GAME_STATUSES = ('scheduled', 'warmup', 'in_progress', 'suspended', 'postponed', 'cancelled', 'final')
INNING_HALVES = ('top', 'bottom')
END_STATUSES = ('final', 'suspended', 'postponed', 'cancelled')

STANDARD_INNINGS = 9
MAX_OUTS = 3
MAX_INNING = 99


# ------------------------------- Rosters ------------------------------- #
FIELD_POSITIONS = ('P', 'C', '1B', '2B', '3B', 'SS', 'LF', 'CF', 'RF', 'DH', 'UTIL')
BATTING_SIDES = ('L', 'R', 'S')
THROWING_ARMS = ('L', 'R')
PITCHING_DECISIONS = ('W', 'L', 'S', 'H', 'BS', 'ND')


# ------------------------------- Scorebook ------------------------------- #
PA_RESULT_SUBTYPES = {
    'hit': ('1B', '2B', '3B', 'HR'),
    'walk': ('BB', 'IBB', 'HBP'),
    'out': ('K', 'Kc', 'GO', 'FO', 'LO', 'PO', 'DP', 'FC'),
    'sacrifice': ('SAC', 'SF'),
}
PA_RESULT_TYPES = tuple(PA_RESULT_SUBTYPES)
MAX_RBI_PER_PA = 4


# ------------------------------- Team chat ------------------------------- #
CHANNEL_IMPORTANT = 'important'
CHANNEL_GENERAL = 'general'
CHANNEL_SUBSTITUTES = 'substitutes'

CHANNELS = {
    CHANNEL_IMPORTANT: {
        'name': 'Important',
        'description': 'Official team announcements from the manager',
        'icon': 'megaphone',
        'can_all_post': False,
        'sort_order': 1,
    },
    CHANNEL_GENERAL: {
        'name': 'General',
        'description': 'Team discussion',
        'icon': 'chat-bubble',
        'can_all_post': True,
        'sort_order': 2,
    },
    CHANNEL_SUBSTITUTES: {
        'name': 'Substitutes',
        'description': 'Find fill-ins when you cannot make a game',
        'icon': 'user-plus',
        'can_all_post': True,
        'sort_order': 3,
    },
}
CHANNEL_TYPES = tuple(CHANNELS)

MESSAGE_MAX_LENGTH = 2000
REPLY_PREVIEW_LENGTH = 100
DELETED_MESSAGE_PLACEHOLDER = '[Message deleted]'


# ------------------------------- Availability ------------------------------- #
AVAILABILITY_STATUSES = ('available', 'unavailable', 'tentative', 'no_response')


# ------------------------------- Pagination ------------------------------- #
DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


# ------------------------------- Season stats ------------------------------- #
BATTING_MIN_AB = 30
PITCHING_MIN_IP = 15
LEADERBOARD_SIZE = 5
STATS_PAGE_SIZE = 50
