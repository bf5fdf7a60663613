# ABOUTME: Static lookup tables for the advisor: KPI keyword lists and the compliance watch-list.
# ABOUTME: Add a KPI category or watch-list term here; the scoring code reads these maps as-is.

# KPI name -> keywords that signal the task moves that KPI.
KPI_KEYWORDS: dict[str, tuple[str, ...]] = {
    "体验课转化率": ("转化", "体验", "试听", "报名", "课程", "学员"),
    "教材完成度": ("教材", "完成", "进度", "学习", "内容", "资料"),
    "ROI": ("收入", "成本", "利润", "投资", "回报", "效益"),
    "续费率": ("续费", "续课", "留存", "维护", "服务"),
    "转介绍率": ("推荐", "介绍", "口碑", "分享", "传播"),
}

# Watch-list term -> suggested replacement. Iteration order is the reporting order.
SENSITIVE_WORD_SUGGESTIONS: dict[str, str] = {
    "猪": '建议使用"猪肉"或其他替代词汇',
    "酒": '建议使用"酒精饮料"或避免提及',
    "十字架": "建议避免宗教符号",
    "圣诞节": '建议使用"节日"替代',
    "男女同框": "建议注意性别隔离要求",
    "以色列": '建议使用"中东地区"替代',
}

SENSITIVE_WORDS: tuple[str, ...] = tuple(SENSITIVE_WORD_SUGGESTIONS)

DEFAULT_SENSITIVE_SUGGESTION = "建议重新考虑此词汇"
