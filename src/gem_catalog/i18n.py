"""Minimal translation helpers for GUI text."""
from __future__ import annotations

from typing import Dict

from PySide6.QtCore import QLocale

from .models import ErrorRecord

Translations = Dict[str, str]


_TRANSLATIONS: Dict[str, Translations] = {
    "en": {
        "error_action_label": "Action",
        "window_title": "Gem Catalog",
        "filter_by": "Filter by",
        "filter_see_all": "See all",
        "filter_see_less": "See less",
        "filter_clear": "Clear filters",
        "category_Provider": "Provider",
        "category_Type": "Type",
        "category_Supported Platforms": "Supported Platforms",
        "category_Features": "Features",
        "search_placeholder": "Search gems...",
        "summary_template": "Showing {visible} of {total} gems",
        "export_csv": "Export CSV",
        "export_json": "Export JSON",
        "export_csv_dialog": "Export CSV",
        "export_json_dialog": "Export JSON",
        "export_csv_filter": "CSV Files (*.csv)",
        "export_json_filter": "JSON Files (*.json)",
        "export_csv_done": "CSV exported: {path}",
        "export_json_done": "JSON exported: {path}",
        "export_error_title": "Export failed",
        "no_results_title": "No gems",
        "no_results_body": "No gems match the current filters",
        "invalid_filename_title": "Invalid filename",
        "catalog_error_title": "Catalog Error",
        "ready": "Ready",
        "storage_warning_line": "Could not write {scope} file {path}: {detail}",
        "storage_scope_config": "settings",
        "storage_scope_export": "export",
        "error.invalid_filename.message": (
            "The filename \"{filename}\" contains reserved characters: {characters}."
        ),
        "error.invalid_filename.action": (
            "Choose a name without these characters; they are used for asset aliases."
        ),
        "error.catalog_load_failed.message": "The gem catalog could not be loaded: {detail}.",
        "error.catalog_load_failed.action": "Fix or remove {path} and restart.",
        "error.export_failed.message": "Writing {path} failed: {detail}.",
        "error.export_failed.action": "Check the destination folder and try again.",
    },
    "ja": {
        "error_action_label": "対応",
        "window_title": "Gem カタログ",
        "filter_by": "絞り込み",
        "filter_see_all": "すべて表示",
        "filter_see_less": "折りたたむ",
        "filter_clear": "絞り込みを解除",
        "category_Provider": "提供元",
        "category_Type": "種類",
        "category_Supported Platforms": "対応プラットフォーム",
        "category_Features": "機能",
        "search_placeholder": "Gem を検索...",
        "summary_template": "{total} 件中 {visible} 件を表示",
        "export_csv": "CSV出力",
        "export_json": "JSON出力",
        "export_csv_dialog": "CSV出力",
        "export_json_dialog": "JSON出力",
        "export_csv_filter": "CSVファイル (*.csv)",
        "export_json_filter": "JSONファイル (*.json)",
        "export_csv_done": "CSVを書き出しました: {path}",
        "export_json_done": "JSONを書き出しました: {path}",
        "export_error_title": "出力エラー",
        "no_results_title": "該当なし",
        "no_results_body": "現在の条件に一致する Gem はありません",
        "invalid_filename_title": "無効なファイル名",
        "catalog_error_title": "カタログエラー",
        "ready": "待機中",
        "storage_warning_line": "{scope}ファイル {path} を書き込めませんでした: {detail}",
        "storage_scope_config": "設定",
        "storage_scope_export": "出力",
        "error.invalid_filename.message": (
            "ファイル名 \"{filename}\" に使用できない文字が含まれています: {characters}。"
        ),
        "error.invalid_filename.action": (
            "これらの文字はアセットのエイリアスに使われるため、別の名前を指定してください。"
        ),
        "error.catalog_load_failed.message": "Gem カタログを読み込めませんでした: {detail}。",
        "error.catalog_load_failed.action": "{path} を修正または削除してから再起動してください。",
        "error.export_failed.message": "{path} への書き込みに失敗しました: {detail}。",
        "error.export_failed.action": "保存先フォルダを確認して再試行してください。",
    },
}


DEFAULT_LANGUAGE = "en"


def detect_language() -> str:
    """Return the UI language code based on OS locale."""
    if QLocale.system().language() == QLocale.Language.Japanese:
        return "ja"
    return DEFAULT_LANGUAGE


def translate(key: str, lang: str | None = None) -> str:
    """Simple dictionary lookup with English fallback."""
    language = lang or detect_language()
    catalog = _TRANSLATIONS.get(language, _TRANSLATIONS[DEFAULT_LANGUAGE])
    if key in catalog:
        return catalog[key]
    return _TRANSLATIONS[DEFAULT_LANGUAGE].get(key, key)


def _format_template(template: str, context: Dict[str, str]) -> str:
    try:
        return template.format(**context)
    except KeyError:
        return template


def format_error_record(record: ErrorRecord, lang: str | None = None) -> str:
    """Return a localized string combining code, message, and action."""

    language = lang or detect_language()
    message = _format_template(translate(record.message_key, language), record.context)
    action = _format_template(translate(record.action_key, language), record.context)
    action_label = translate("error_action_label", language)
    return f"[{record.code}] {message} ({action_label}: {action})"
