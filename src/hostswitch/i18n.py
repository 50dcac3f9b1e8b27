"""
Internationalization (i18n) module for hostswitch.

Provides translations for all user-facing messages in English (en) and
Japanese (ja).
"""

from typing import Optional


SUPPORTED_LANGUAGES = frozenset({"en", "ja"})
DEFAULT_LANGUAGE = "en"


# Structure: {message_key: {language_code: translated_message}}
TRANSLATIONS: dict[str, dict[str, str]] = {
    # Errors
    "error.invalid_name.empty": {
        "en": "Profile name cannot be empty",
        "ja": "プロファイル名を入力してください",
    },
    "error.invalid_name": {
        "en": "Invalid profile name '{name}'. Use only letters, numbers, hyphens, and underscores",
        "ja": "プロファイル名 '{name}' は無効です。英数字、ハイフン、アンダースコアのみ使用できます",
    },
    "error.not_found": {
        "en": "Profile '{name}' does not exist.",
        "ja": "プロファイル '{name}' は存在しません。",
    },
    "error.already_exists": {
        "en": "Profile '{name}' already exists.",
        "ja": "プロファイル '{name}' は既に存在します。",
    },
    "error.cannot_delete_active": {
        "en": "Cannot delete the currently active profile '{name}'.",
        "ja": "現在有効なプロファイル '{name}' は削除できません。",
    },
    "error.permission_denied": {
        "en": "Permission denied. Run with sudo.",
        "ja": "権限がありません。sudo で実行してください。",
    },
    "error.create_failed": {
        "en": "Error creating profile: {error}",
        "ja": "プロファイルの作成に失敗しました: {error}",
    },
    "error.delete_failed": {
        "en": "Error deleting profile: {error}",
        "ja": "プロファイルの削除に失敗しました: {error}",
    },
    "error.read_failed": {
        "en": "Error reading profile: {error}",
        "ja": "プロファイルの読み込みに失敗しました: {error}",
    },
    "error.list_failed": {
        "en": "Failed to list profiles: {error}",
        "ja": "プロファイル一覧の取得に失敗しました: {error}",
    },
    "error.switch_failed": {
        "en": "Error switching profile: {error}",
        "ja": "プロファイルの切り替えに失敗しました: {error}",
    },
    "error.record_failed": {
        "en": "Hosts file updated but the active profile could not be recorded: {error}",
        "ja": "hosts ファイルは更新されましたが、有効なプロファイルを記録できませんでした: {error}",
    },
    "error.elevation_failed": {
        "en": "Failed to switch profile: {message}",
        "ja": "プロファイルの切り替えに失敗しました: {message}",
    },
    "error.editor_failed": {
        "en": "Failed to edit profile: {error}",
        "ja": "プロファイルの編集に失敗しました: {error}",
    },
    "error.bootstrap_failed": {
        "en": "Cannot create config directory {path}: {error}",
        "ja": "設定ディレクトリ {path} を作成できません: {error}",
    },

    # Create / delete / edit
    "create.default": {
        "en": "Profile '{name}' created with default content.",
        "ja": "プロファイル '{name}' をデフォルト内容で作成しました。",
    },
    "create.from_current": {
        "en": "Profile '{name}' created from current hosts file.",
        "ja": "プロファイル '{name}' を現在の hosts ファイルから作成しました。",
    },
    "delete.success": {
        "en": "Profile '{name}' deleted.",
        "ja": "プロファイル '{name}' を削除しました。",
    },
    "edit.success": {
        "en": "Profile '{name}' edited.",
        "ja": "プロファイル '{name}' を編集しました。",
    },

    # Switch
    "switch.success": {
        "en": "Switched to profile '{name}'.",
        "ja": "プロファイル '{name}' に切り替えました。",
    },
    "switch.backup_created": {
        "en": "Backup created: {path}",
        "ja": "バックアップを作成しました: {path}",
    },
    "switch.drift_warning": {
        "en": "Current hosts file was modified outside of hostswitch.",
        "ja": "現在の hosts ファイルは hostswitch 以外で変更されています。",
    },
    "switch.elevating": {
        "en": "This operation requires sudo privileges. Rerunning with sudo...",
        "ja": "この操作には sudo 権限が必要です。sudo で再実行します...",
    },

    # List / show / status
    "list.header": {
        "en": "Available profiles:",
        "ja": "利用可能なプロファイル:",
    },
    "list.empty": {
        "en": "No profiles found. Create one with 'hostswitch create <name>'.",
        "ja": "プロファイルがありません。'hostswitch create <name>' で作成してください。",
    },
    "list.current_marker": {
        "en": " (current)",
        "ja": " (現在)",
    },
    "show.header": {
        "en": "Content of profile '{name}':",
        "ja": "プロファイル '{name}' の内容:",
    },
    "current.active": {
        "en": "Active profile: {name}",
        "ja": "有効なプロファイル: {name}",
    },
    "current.none": {
        "en": "No profile active.",
        "ja": "有効なプロファイルはありません。",
    },
    "current.drifted": {
        "en": "Hosts file was modified since the last switch.",
        "ja": "前回の切り替え以降に hosts ファイルが変更されています。",
    },
    "current.clean": {
        "en": "Hosts file matches the active profile.",
        "ja": "hosts ファイルは有効なプロファイルと一致しています。",
    },
    "backups.header": {
        "en": "Backups:",
        "ja": "バックアップ:",
    },
    "backups.empty": {
        "en": "No backups found.",
        "ja": "バックアップはありません。",
    },

    # Update check
    "update.available": {
        "en": "Update available: {current} -> {latest}. Run 'pip install -U hostswitch' to update.",
        "ja": "新しいバージョンがあります: {current} -> {latest}。'pip install -U hostswitch' で更新してください。",
    },

    # Interactive menu
    "menu.prompt": {
        "en": "What would you like to do?",
        "ja": "何をしますか?",
    },
    "menu.switch": {
        "en": "Switch profile ({status})",
        "ja": "プロファイルを切り替える ({status})",
    },
    "menu.status_current": {
        "en": "current: {name}",
        "ja": "現在: {name}",
    },
    "menu.status_none": {
        "en": "no profile active",
        "ja": "有効なプロファイルなし",
    },
    "menu.list": {
        "en": "List all profiles",
        "ja": "プロファイル一覧",
    },
    "menu.create": {
        "en": "Create new profile",
        "ja": "プロファイルを作成",
    },
    "menu.edit": {
        "en": "Edit profile",
        "ja": "プロファイルを編集",
    },
    "menu.show": {
        "en": "Show profile content",
        "ja": "プロファイルの内容を表示",
    },
    "menu.delete": {
        "en": "Delete profile",
        "ja": "プロファイルを削除",
    },
    "menu.exit": {
        "en": "Exit",
        "ja": "終了",
    },
    "prompt.select_switch": {
        "en": "Select profile to switch to:",
        "ja": "切り替えるプロファイルを選択してください:",
    },
    "prompt.select_edit": {
        "en": "Select profile to edit:",
        "ja": "編集するプロファイルを選択してください:",
    },
    "prompt.select_show": {
        "en": "Select profile to show:",
        "ja": "表示するプロファイルを選択してください:",
    },
    "prompt.select_delete": {
        "en": "Select profile to delete:",
        "ja": "削除するプロファイルを選択してください:",
    },
    "prompt.profile_name": {
        "en": "Enter profile name:",
        "ja": "プロファイル名を入力してください:",
    },
    "prompt.from_current": {
        "en": "Copy current hosts file content?",
        "ja": "現在の hosts ファイルの内容をコピーしますか?",
    },
    "prompt.confirm_delete": {
        "en": "Are you sure you want to delete '{name}'?",
        "ja": "'{name}' を削除してもよろしいですか?",
    },
    "prompt.choice": {
        "en": "Enter a number [1-{max}]: ",
        "ja": "番号を入力してください [1-{max}]: ",
    },
    "prompt.invalid_choice": {
        "en": "Please enter a number between 1 and {max}.",
        "ja": "1 から {max} までの番号を入力してください。",
    },
    "interactive.no_profiles": {
        "en": "No profiles available. Create one first!",
        "ja": "プロファイルがありません。先に作成してください!",
    },
    "interactive.no_other_profiles": {
        "en": "No other profiles available to switch to.",
        "ja": "切り替え可能な他のプロファイルはありません。",
    },
    "interactive.no_deletable": {
        "en": "No profiles available for deletion.",
        "ja": "削除できるプロファイルはありません。",
    },
    "interactive.delete_cancelled": {
        "en": "Deletion cancelled.",
        "ja": "削除をキャンセルしました。",
    },
    "interactive.goodbye": {
        "en": "Goodbye!",
        "ja": "さようなら!",
    },
    "cli.interrupted": {
        "en": "Aborted.",
        "ja": "中断しました。",
    },
}


def get_message(
    key: str,
    language: Optional[str] = None,
    **kwargs,
) -> str:
    """
    Get a translated message by key.

    Args:
        key: The message key (e.g., 'error.not_found')
        language: Language code ('en' or 'ja'). Defaults to DEFAULT_LANGUAGE.
        **kwargs: Format arguments for the message template

    Returns:
        The translated and formatted message string.
        If the key is not found, returns the key itself.
        If the language is not found, falls back to DEFAULT_LANGUAGE.

    Examples:
        >>> get_message('switch.success', 'en', name='dev')
        "Switched to profile 'dev'."
    """
    if language is None or language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE

    translations = TRANSLATIONS.get(key)
    if translations is None:
        return key

    message = translations.get(language)
    if message is None:
        message = translations.get(DEFAULT_LANGUAGE)
    if message is None:
        return key

    if kwargs:
        try:
            message = message.format(**kwargs)
        except KeyError:
            # Missing placeholder values leave the template unformatted
            pass

    return message


def get_all_message_keys() -> set[str]:
    """Get all available message keys."""
    return set(TRANSLATIONS.keys())


def get_missing_translations(language: str) -> set[str]:
    """
    Get all message keys that are missing translations for a language.

    Args:
        language: The language code to check

    Returns:
        Set of message keys missing translations for the specified language.
    """
    return {
        key for key, translations in TRANSLATIONS.items()
        if language not in translations
    }


def validate_translations() -> dict[str, set[str]]:
    """
    Validate that all languages have all translations.

    Returns:
        Dictionary mapping language codes to sets of missing message keys.
        Empty sets indicate complete translations.
    """
    return {
        language: get_missing_translations(language)
        for language in SUPPORTED_LANGUAGES
    }
