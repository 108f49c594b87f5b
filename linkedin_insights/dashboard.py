"""
Assemble the dashboard document: a UI-shaped projection of the analytics and
brand reports with the section/field names the display layer indexes into.
"""
from __future__ import annotations

from typing import Any, Dict, List

from linkedin_insights.metrics import percent, round_half_up

SENTIMENT_COLORS = {
    "positive": "#16a34a",
    "negative": "#dc2626",
    "neutral": "#0891b2",
}
DEFAULT_COLOR = "#6b7280"

TABS = [
    ("overall", "Overall", "📊"),
    ("positive", "Positive", "👍"),
    ("negative", "Negative", "⚠️"),
    ("queries", "Queries", "❓"),
    ("departments", "Teams", "👥"),
    ("actions", "Actions", "🎯"),
]

TIME_PERIODS = [
    ("today", "Today", "Today"),
    ("yesterday", "Yesterday", "Yesterday"),
    ("last7days", "Last 7 Days", "7D"),
    ("thisweek", "This Week", "This Week"),
    ("lastweek", "Last Week", "Last Week"),
    ("thismonth", "This Month", "This Month"),
    ("lastmonth", "Last Month", "Last Month"),
    ("last3months", "Last 3 Months", "3M"),
]

TOP_QUESTIONS = [
    "How to increase LinkedIn engagement?",
    "What content performs best?",
    "When to post for maximum reach?",
    "How to optimize hashtags?",
    "Best practices for LinkedIn posts?",
]


def sentiment_color(label: str) -> str:
    return SENTIMENT_COLORS.get(label, DEFAULT_COLOR)


def _metric_cards(a: Dict[str, Any]) -> List[Dict[str, str]]:
    total = a["totalPosts"]
    counts = a["sentimentCounts"]
    cards = [{
        "title": "Avg Engagement",
        "value": str(round_half_up(a["avgEngagement"])),
        "bgColor": "bg-secondary/30",
        "textColor": "text-foreground",
        "description": "Avg Engagement",
    }]
    for label, title, tone in (("positive", "Positive", "green"),
                               ("negative", "Negative", "red"),
                               ("neutral", "Neutral", "blue")):
        count = counts.get(label, 0)
        cards.append({
            "title": title,
            "value": f"{percent(count, total)}%",
            "bgColor": f"bg-{tone}-50",
            "textColor": f"text-{tone}-600",
            "description": title,
            "subValue": f"{count} posts",
            "subTextColor": f"text-{tone}-600",
        })
    return cards


def overall_section(a: Dict[str, Any], reports: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "headerData": {
            "totalReviews": str(a["totalPosts"]),
            "description": "Total LinkedIn Posts This Month",
        },
        "sentimentData": [
            {"name": label, "value": percent(count, a["totalPosts"]), "color": sentiment_color(label)}
            for label, count in a["sentimentCounts"].items()
        ],
        "trendData": a["trends"],
        "metricCards": _metric_cards(a),
        "keyInsights": reports["keyInsights"],
    }


def overview_section(a: Dict[str, Any]) -> Dict[str, Any]:
    trends = a["trends"]
    return {
        "positiveData": [{"value": t["positive"]} for t in trends],
        "negativeData": [{"value": t["negative"]} for t in trends],
        "queriesData": [{"value": t["queries"]} for t in trends],
    }


def queries_section(a: Dict[str, Any]) -> Dict[str, Any]:
    likes = a["totalLikes"]
    return {
        "queryTypes": [
            {"name": "Engagement", "value": 35, "color": "#3b82f6", "count": round_half_up(likes * 0.35)},
            {"name": "Comments", "value": 28, "color": "#06b6d4", "count": a["totalComments"]},
            {"name": "Shares", "value": 22, "color": "#8b5cf6", "count": a["totalShares"]},
            {"name": "Likes", "value": 15, "color": "#10b981", "count": round_half_up(likes * 0.15)},
        ],
        "topQuestions": list(TOP_QUESTIONS),
    }


def actions_section(a: Dict[str, Any]) -> Dict[str, Any]:
    tiers = a["engagementTiers"]
    total = a["totalPosts"]
    return {
        "focusAreas": [
            {
                "id": "P1",
                "area": "Content Engagement Optimization",
                "urgency": "Critical",
                "impact": "High",
                "analysis": f"{tiers['low']} posts have low engagement ({percent(tiers['low'], total)}% of total)",
                "solves": f"~{round_half_up(tiers['low'] * 0.5)} posts will improve with better content strategy",
                "solvesDetail": "Content team needs to focus on engagement optimization",
                "timeline": "Immediate",
                "department": "Content",
                "severity": "critical",
            },
            {
                "id": "P2",
                "area": "Posting Schedule Optimization",
                "urgency": "High",
                "impact": "Medium",
                "analysis": "Posting times affect engagement rates significantly",
                "solves": f"~{round_half_up(tiers['medium'] * 0.3)} posts will benefit from better timing",
                "solvesDetail": "Analytics team to analyze optimal posting times",
                "timeline": "48 hours",
                "department": "Analytics",
                "severity": "high",
            },
            {
                "id": "P3",
                "area": "Hashtag Strategy Improvement",
                "urgency": "High",
                "impact": "Medium",
                "analysis": "Hashtag usage can increase reach by 25%",
                "solves": f"~{round_half_up(total * 0.2)} posts need better hashtag strategy",
                "solvesDetail": "Marketing team to research trending hashtags",
                "timeline": "1 week",
                "department": "Marketing",
                "severity": "high",
            },
        ]
    }


def top_issues_section(a: Dict[str, Any]) -> Dict[str, Any]:
    tiers = a["engagementTiers"]
    total = a["totalPosts"]

    def share(fraction: float) -> int:
        return round_half_up(total * fraction)

    return {
        "departmentData": [
            {
                "id": "content",
                "name": "Content Team",
                "icon": "Users",
                "percentage": percent(tiers["high"], total),
                "trend": "+2.3%",
                "trendDirection": "up",
                "color": "green",
                "bgColor": "bg-green-50/50",
                "borderColor": "border-green-200/50",
                "issues": [
                    {"name": "Low Engagement Posts", "count": tiers["low"], "urgency": "High",
                     "action": "Content strategy review needed"},
                    {"name": "Poor Timing", "count": share(0.2), "urgency": "Medium",
                     "action": "Schedule optimization required"},
                    {"name": "Weak CTAs", "count": share(0.15), "urgency": "Medium",
                     "action": "Call-to-action improvement"},
                    {"name": "Hashtag Issues", "count": share(0.1), "urgency": "Low",
                     "action": "Hashtag research needed"},
                ],
            },
            {
                "id": "analytics",
                "name": "Analytics Team",
                "icon": "Settings",
                "percentage": percent(tiers["medium"], total),
                "trend": "+1.8%",
                "trendDirection": "up",
                "color": "blue",
                "bgColor": "bg-blue-50/50",
                "borderColor": "border-blue-200/50",
                "issues": [
                    {"name": "Data Tracking", "count": share(0.25), "urgency": "High",
                     "action": "Analytics setup improvement"},
                    {"name": "Report Delays", "count": share(0.15), "urgency": "Medium",
                     "action": "Automation needed"},
                    {"name": "Insight Quality", "count": share(0.1), "urgency": "Medium",
                     "action": "Analysis methodology review"},
                ],
            },
        ],
        "trendData": [{"value": t["positive"] + t["negative"]} for t in a["trends"]],
    }


def tabs_section(a: Dict[str, Any]) -> Dict[str, Any]:
    counts = a["sentimentCounts"]
    descriptions = {
        "overall": "Complete overview",
        "positive": f"{counts.get('positive', 0)} posts",
        "negative": f"{counts.get('negative', 0)} posts",
        "queries": f"{a['totalComments']} queries",
        "departments": "Department view",
        "actions": "Action items",
    }
    return {
        "tabs": [
            {"id": tab_id, "label": label, "icon": icon, "description": descriptions[tab_id]}
            for tab_id, label, icon in TABS
        ]
    }


def build_dashboard(analytics: Dict[str, Any], reports: Dict[str, Any]) -> Dict[str, Any]:
    """Pure reshaping of analytics + reports into the dashboard document."""
    return {
        "overallSection": overall_section(analytics, reports),
        "overviewSection": overview_section(analytics),
        "positiveReviewsSection": {
            "positiveKeywords": reports["positiveKeywords"],
            "recentPraises": reports["recentPraises"],
            "positiveFeedbackCategories": reports["positiveFeedbackCategories"],
            "positiveReviewMetrics": reports["positiveReviewMetrics"],
        },
        "negativeReviewsSection": {
            "negativeKeywords": reports["negativeKeywords"],
            "recentComplaints": reports["recentComplaints"],
            "negativeReviewMetrics": reports["negativeReviewMetrics"],
            "negativeProblemAreas": reports["negativeProblemAreas"],
        },
        "queriesSection": queries_section(analytics),
        "actionsSection": actions_section(analytics),
        "topIssuesSection": top_issues_section(analytics),
        "tabs": tabs_section(analytics),
        "timePeriodSelector": {
            "timePeriods": [
                {"id": pid, "label": label, "shortLabel": short} for pid, label, short in TIME_PERIODS
            ]
        },
    }
