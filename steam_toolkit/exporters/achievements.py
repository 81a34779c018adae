# ===== IMPORTS & DEPENDENCIES =====
import json
from typing import Sequence

from steam_toolkit.models.records import AchievementRecord

# ===== UTILITY FUNCTIONS =====

def export_achievements_ini(achievements: Sequence[AchievementRecord]) -> str:
    """`[Achievements]` followed by one `<api name>=1` line per achievement."""
    lines = ["[Achievements]"]
    lines.extend(f"{achievement.name}=1" for achievement in achievements)
    return "\n".join(lines) + "\n"


def export_achievements_json(achievements: Sequence[AchievementRecord]) -> str:
    payload = [
        {
            'name': achievement.name,
            'displayName': achievement.display_name,
            'description': achievement.description,
            'icon': achievement.icon,
            'iconGray': achievement.icon_gray,
        }
        for achievement in achievements
    ]
    return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"
