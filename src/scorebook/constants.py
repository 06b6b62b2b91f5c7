# side-channel constants
DEFAULT_STATE_KEY = 'currentGameState'
DEFAULT_STORE_DIR = 'data/scorebook'
DEFAULT_HISTORY_LIMIT = 500

# match constants
STARTERS_PER_TEAM = 5
DEFAULT_QUARTERS = 4
DEFAULT_MINUTES_PER_QUARTER = 10
DEFAULT_MINUTES_PER_OVERTIME = 5
HOME_SIDE = 'home'
AWAY_SIDE = 'away'

# clock constants
DEFAULT_TICK_INTERVAL = 1.0
