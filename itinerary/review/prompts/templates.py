"""
Prompt templates for the itinerary review call.
"""

DEFAULT_DESTINATIONS = ["서울"]
DEFAULT_TRAVEL_STYLES = ["편안한"]

REVIEW_SYSTEM_PROMPT = (
    "You review multi-day travel itineraries. "
    "Answer with a single JSON object and nothing else."
)

REVIEW_PROMPT_TEMPLATE = """여행 일정을 검토하고 문제가 있으면 조정 제안을 해주세요.

[여행 정보]
- 목적지: {destinations}
- 기간: {day_count}일
- 여행 스타일: {travel_styles}

[생성된 일정]
{days}

[체크 포인트]
{criteria}

[응답 형식]
{{
  "needsAdjustment": true/false,
  "reason": "조정이 필요한 이유",
  "suggestions": [
    {{
      "day": 1,
      "type": "MOVE/REMOVE/SWAP",
      "place": "장소명",
      "targetDay": 2,
      "swapWith": "SWAP일 때 교환할 장소명",
      "action": "구체적인 조정 내용"
    }}
  ]
}}
"""

DAY_HEADER_TEMPLATE = "Day {day} (이동거리: {distance:.1f}km):"

PLACE_LINE_TEMPLATE = "- {recommend_time} [{time_block}] {place} ({category})"
