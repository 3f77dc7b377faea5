from enum import IntEnum

class Quality(IntEnum):
    BLACKOUT = 0
    FORGOT = 1
    FAMILIAR = 2
    HARD = 3
    GOOD = 4
    EASY = 5

QUALITY_LABELS = {
    Quality.BLACKOUT: "Blackout",
    Quality.FORGOT: "Forgot",
    Quality.FAMILIAR: "Incorrect but familiar",
    Quality.HARD: "Hard",
    Quality.GOOD: "Good",
    Quality.EASY: "Easy",
}
