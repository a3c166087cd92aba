from research_hub.core.storage import KeyValueStorage

THEME_KEY = "rh_theme"
AUTH_KEY = "rh_auth"


class UserPreferences:
    """用户偏好，直接读写持久化镜像

    登录只是一个标记，不做任何认证。
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage

    @property
    def dark_mode(self) -> bool:
        # 默认深色，只有显式保存为 light 时才是浅色
        return self.storage.get(THEME_KEY) != "light"

    def set_dark_mode(self, enabled: bool) -> None:
        self.storage.set(THEME_KEY, "dark" if enabled else "light")

    def toggle_theme(self) -> bool:
        self.set_dark_mode(not self.dark_mode)
        return self.dark_mode

    @property
    def authenticated(self) -> bool:
        return self.storage.get(AUTH_KEY) == "true"

    def login(self) -> None:
        self.storage.set(AUTH_KEY, "true")

    def logout(self) -> None:
        self.storage.remove(AUTH_KEY)
