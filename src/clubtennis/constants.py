# Club Tennis
# Copyright (C) 2025  Club Tennis developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

# --- Constants ---
SAVE_FILE_EXTENSION = ".json"

# Match phases
PHASE_GROUP = "group"
PHASE_QUARTERFINAL = "quarterfinal"
PHASE_SEMIFINAL = "semifinal"
PHASE_FINAL = "final"
PHASES = (PHASE_GROUP, PHASE_QUARTERFINAL, PHASE_SEMIFINAL, PHASE_FINAL)
KNOCKOUT_PHASES = (PHASE_QUARTERFINAL, PHASE_SEMIFINAL, PHASE_FINAL)

PHASE_NAMES = {
    PHASE_GROUP: "Group phase",
    PHASE_QUARTERFINAL: "Quarterfinal",
    PHASE_SEMIFINAL: "Semifinal",
    PHASE_FINAL: "Final",
}

# Entry only ever produces completed matches
STATUS_COMPLETED = "completed"

# Group label used on knockout matches of the single elimination bracket
KO_GROUP_LABEL = "KO"

# Set rules (best of two sets plus match tiebreak)
MAX_SET_GAMES = 7
SET_WIN_GAMES = 6
SET_WIN_MAX_LOSER_GAMES = 4
SETS_TO_WIN = 2

# Match tiebreak rules
MATCH_TIEBREAK_MIN_POINTS = 10
MATCH_TIEBREAK_MIN_MARGIN = 2

# Percentages closer than this are considered equal while ranking
PERCENTAGE_EPSILON = 0.1

# Tournament shape
PLAYERS_PER_GROUP = 4
DEFAULT_QUALIFIER_COUNT = 8
DEFAULT_KNOCKOUT_GROUPS = ["A", "B"]
FINALISTS_PER_KNOCKOUT_GROUP = 2
FIRST_MATCH_ID = 1000

# Roster of the club championship the engine was first used for
DEFAULT_TOURNAMENT_NAME = "Club Championship"
DEFAULT_GROUPS = {
    "A": ["Henning", "Julia", "Fabi", "Michael"],
    "B": ["Markus", "Thomas", "Gunter", "Bernd"],
    "C": ["Sascha", "Herbert", "Sven", "Jose"],
}

# Column names of the external match store
RECORD_FIELDS = {
    "id": "ID",
    "group": "Gruppe",
    "phase": "Phase",
    "player1": "Spieler1",
    "player2": "Spieler2",
    "set1_player1": "Satz1_Spieler1",
    "set1_player2": "Satz1_Spieler2",
    "set2_player1": "Satz2_Spieler1",
    "set2_player2": "Satz2_Spieler2",
    "tiebreak_player1": "Tiebreak_Spieler1",
    "tiebreak_player2": "Tiebreak_Spieler2",
    "winner": "Sieger",
    "status": "Status",
    "timestamp": "Zeitstempel",
}

# Logging
LOG_LEVEL_ENV_VAR = "CLUBTENNIS_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
