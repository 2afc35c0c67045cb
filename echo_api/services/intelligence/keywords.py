"""Bilingual (Chinese/English) keyword tables for classification and tagging.

Membership is load-bearing: classification and tag results depend on the
exact entries and their order, so edit with care.
"""

from typing import TypedDict

BUG_KEYWORDS: tuple[str, ...] = (
    # Chinese
    "崩溃",
    "错误",
    "无法",
    "失败",
    "异常",
    "故障",
    "不能",
    "不工作",
    "没反应",
    "卡住",
    "卡死",
    "闪退",
    "黑屏",
    "白屏",
    "显示错误",
    "报错",
    "无法访问",
    "无法登录",
    "无法打开",
    "无法加载",
    "无法保存",
    "无法提交",
    # English
    "bug",
    "crash",
    "error",
    "broken",
    "fail",
    "failure",
    "not working",
    "doesn't work",
    "unable to",
    "cannot",
    "exception",
    "freeze",
    "stuck",
    "blank",
    "glitch",
)

FEATURE_KEYWORDS: tuple[str, ...] = (
    # Chinese
    "希望",
    "建议",
    "添加",
    "增加",
    "新增",
    "功能",
    "改进",
    "优化",
    "增强",
    "支持",
    "能否",
    "可以",
    "最好",
    "如果",
    "愿望",
    "期待",
    "想要",
    "需要",
    # English
    "feature",
    "add",
    "improve",
    "enhance",
    "suggest",
    "wish",
    "would like",
    "request",
    "support",
    "implement",
)

ISSUE_KEYWORDS: tuple[str, ...] = (
    # Chinese
    "问题",
    "疑问",
    "困惑",
    "不清楚",
    "不知道",
    "如何",
    "怎么",
    "怎样",
    "咨询",
    "问",
    "求助",
    # English
    "issue",
    "question",
    "help",
    "how to",
    "confused",
    "unclear",
    "problem",
    "trouble",
)

HIGH_PRIORITY_KEYWORDS: tuple[str, ...] = (
    # Chinese
    "紧急",
    "严重",
    "重要",
    "关键",
    "无法使用",
    "完全不能",
    "影响",
    "阻塞",
    "阻碍",
    "核心",
    "主要",
    # English
    "urgent",
    "critical",
    "severe",
    "important",
    "blocking",
    "major",
    "cannot use",
    "unable to work",
)

LOW_PRIORITY_KEYWORDS: tuple[str, ...] = (
    # Chinese
    "建议",
    "可选",
    "也许",
    "可能",
    "或者",
    "轻微",
    "小",
    "次要",
    "非紧急",
    "不急",
    # English
    "suggestion",
    "optional",
    "minor",
    "nice to have",
    "low",
    "not urgent",
    "whenever",
    "eventually",
)


class TagDefinition(TypedDict):
    """A predefined tag and the keywords that suggest it."""

    name: str
    slug: str
    keywords: tuple[str, ...]


# Insertion order is the order suggestions are returned in
PREDEFINED_TAGS: tuple[TagDefinition, ...] = (
    {
        "name": "Performance",
        "slug": "performance",
        "keywords": ("performance", "slow", "lag", "性能", "慢", "卡顿", "延迟", "优化"),
    },
    {
        "name": "UI/UX",
        "slug": "ui-ux",
        "keywords": (
            "ui",
            "ux",
            "interface",
            "design",
            "layout",
            "界面",
            "设计",
            "布局",
            "体验",
        ),
    },
    {
        "name": "Security",
        "slug": "security",
        "keywords": ("security", "auth", "permission", "安全", "权限", "认证", "登录"),
    },
    {
        "name": "Mobile",
        "slug": "mobile",
        "keywords": ("mobile", "ios", "android", "app", "phone", "移动", "手机"),
    },
    {
        "name": "API",
        "slug": "api",
        "keywords": ("api", "endpoint", "integration", "接口", "集成"),
    },
    {
        "name": "Database",
        "slug": "database",
        "keywords": ("database", "db", "query", "data", "数据库", "查询", "数据"),
    },
    {
        "name": "Documentation",
        "slug": "documentation",
        "keywords": ("docs", "documentation", "guide", "tutorial", "文档", "指南", "教程"),
    },
    {
        "name": "Accessibility",
        "slug": "accessibility",
        "keywords": ("a11y", "accessibility", "screen reader", "无障碍", "辅助"),
    },
    {
        "name": "Localization",
        "slug": "localization",
        "keywords": (
            "i18n",
            "l10n",
            "localization",
            "translation",
            "language",
            "国际化",
            "翻译",
            "语言",
        ),
    },
    {
        "name": "Testing",
        "slug": "testing",
        "keywords": ("test", "testing", "spec", "测试"),
    },
    {
        "name": "Billing",
        "slug": "billing",
        "keywords": ("billing", "payment", "price", "subscription", "账单", "支付", "价格", "订阅"),
    },
    {
        "name": "Integration",
        "slug": "integration",
        "keywords": ("integration", "webhook", "third-party", "集成", "第三方"),
    },
)
