"""
Message table for the two supported UI languages.

msg(key, lang) is a pure lookup: unknown keys come back verbatim, so a
missing translation shows up on screen as its key rather than crashing
the menu.
"""

from enum import Enum


class Language(str, Enum):
    ZH = "zh"
    EN = "en"


DEFAULT_LANGUAGE = Language.ZH


# ── Message table ─────────────────────────────────────────────────────────────

_ZH: dict[str, str] = {
    "title":                "系统安装与配置控制脚本",
    "choose_lang":          "选择语言 / Choose language:",
    "main_menu":            "主菜单:",
    "opt_run_scripts":      "运行 scripts 目录下的脚本",
    "opt_recommended":      "推荐执行顺序",
    "opt_e2e":              "Ubuntu 24 端到端测试",
    "opt_remote":           "运行远程脚本",
    "opt_install_docker":   "安装 Docker",
    "opt_config_docker_root": "配置 Docker 数据目录到 /docker",
    "opt_manage_stacks":    "管理 Compose 栈 (复制到 /docker/stacks)",
    "opt_switch_lang":      "切换语言",
    "opt_exit":             "退出",
    "enter_choice":         "请输入编号:",
    "need_root":            "需要以 root 运行此操作。将使用 sudo 执行。",
    "confirm":              "确认执行?",
    "done":                 "完成",
    "error":                "发生错误",
    "list_scripts":         "远程脚本列表 (按编号选择执行，支持逗号分隔):",
    "list_local":           "本地脚本列表 (按编号选择执行，支持逗号分隔):",
    "downloading":          "正在下载脚本...",
    "cache_hit":            "命中缓存，跳过下载",
    "download_failed":      "下载失败",
    "no_scripts":           "未在 scripts 目录发现脚本",
    "invalid_choice":       "无效的选择",
    "docker_not_installed": "未检测到 Docker，请先安装。",
    "will_config_root":     "将把 Docker 数据目录迁移到 /docker，需停机并复制数据。",
    "docker_config_done":   "Docker 数据目录已配置为 /docker",
    "stacks_synced":        "Compose 栈已同步到 {dst}",
    "no_stacks":            "本地没有 Compose 栈: {src}",
    "target_user_prompt":   "目标用户 (用于 SSH 默认配置和用户工具)，留空跳过:",
    "log_tail":             "日志 {path} 的最后几行:",
    "sequence_summary":     "{ok} 个步骤成功  ·  {failed} 个失败",
    "sequence_logs":        "日志目录: {path}",
    "e2e_missing":          "未找到端到端测试脚本: {path}",
    "unsupported_os":       "不支持的系统: {name}；需要 Ubuntu 22.04 或 24.04",
    "cancelled":            "已取消",
}

_EN: dict[str, str] = {
    "title":                "System Setup & Configuration Control",
    "choose_lang":          "Choose language / 选择语言:",
    "main_menu":            "Main Menu:",
    "opt_run_scripts":      "Run scripts under 'scripts'",
    "opt_recommended":      "Recommended order",
    "opt_e2e":              "Ubuntu 24 end-to-end test",
    "opt_remote":           "Run remote scripts",
    "opt_install_docker":   "Install Docker",
    "opt_config_docker_root": "Configure Docker data-root to /docker",
    "opt_manage_stacks":    "Manage Compose stacks (copy to /docker/stacks)",
    "opt_switch_lang":      "Switch language",
    "opt_exit":             "Exit",
    "enter_choice":         "Enter number:",
    "need_root":            "Root privileges required. Will use sudo.",
    "confirm":              "Proceed?",
    "done":                 "Done",
    "error":                "Error occurred",
    "list_scripts":         "Remote scripts (choose numbers, comma-separated supported):",
    "list_local":           "Local scripts (choose numbers, comma-separated supported):",
    "downloading":          "Downloading script...",
    "cache_hit":            "Cache hit, skip download",
    "download_failed":      "Download failed",
    "no_scripts":           "No scripts found in 'scripts' directory",
    "invalid_choice":       "Invalid choice",
    "docker_not_installed": "Docker not detected, please install first.",
    "will_config_root":     "Docker data-root will be migrated to /docker; service stop and copy required.",
    "docker_config_done":   "Docker data-root configured to /docker",
    "stacks_synced":        "Stacks synced to {dst}",
    "no_stacks":            "No local docker stacks at {src}",
    "target_user_prompt":   "Target user (for SSH defaults & user tools), blank to skip:",
    "log_tail":             "Last lines of {path}:",
    "sequence_summary":     "{ok} steps succeeded  ·  {failed} failed",
    "sequence_logs":        "Logs: {path}",
    "e2e_missing":          "End-to-end test script not found: {path}",
    "unsupported_os":       "Unsupported OS: {name}; require Ubuntu 22.04 or 24.04",
    "cancelled":            "Cancelled",
}

_TABLES: dict[Language, dict[str, str]] = {
    Language.ZH: _ZH,
    Language.EN: _EN,
}


# ── Public API ────────────────────────────────────────────────────────────────

def msg(key: str, lang: Language, **kwargs) -> str:
    """Return the localized string for key, or key itself when unknown."""
    text = _TABLES.get(lang, _ZH).get(key)
    if text is None:
        return key
    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, IndexError):
            pass
    return text


def parse_language(value: str | None) -> Language | None:
    """Map 'zh' / 'en' (any case) to a Language, anything else to None."""
    if not value:
        return None
    try:
        return Language(value.strip().lower())
    except ValueError:
        return None


def language_from_choice(choice: str | None) -> Language:
    """Menu answer to Language: '2' is English, everything else Chinese."""
    if choice is not None and choice.strip() == "2":
        return Language.EN
    return Language.ZH
