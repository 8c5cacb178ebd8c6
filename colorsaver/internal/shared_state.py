from colorama import Fore, init

from colorsaver.internal import config, palette, session, storage
from colorsaver.internal.errors import PersistenceError
init(autoreset=True)


class SharedState:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
          cls._instance = super(SharedState, cls).__new__(cls)
          cls._instance.__init__(True)
        return cls._instance

    def __init__(self, should_actually_do_stuff: bool = False):
        if not should_actually_do_stuff:
            return
        print(f"[SharedState] Init")
        self.config = config.Config.from_env()
        self.palette = palette.load_palette(self.config.palette_path)
        self.store = self.create_store(self.config)
        self.controller = session.SessionController(self.palette, self.store, self.config.storage_key)
        print(f"[SharedState] Ready")

    @staticmethod
    def create_store(conf: config.Config) -> storage.BlobStore:
        if conf.is_db_configured:
            try:
                return storage.MySQLStore(
                    conf.db_host,
                    conf.db_port,
                    conf.db_user,
                    conf.db_password,
                    conf.db_name
                )
            except PersistenceError:
                conf.disable_db()

        if conf.storage_path is not None:
            return storage.FileStore(conf.storage_path)

        print(f"[SharedState] {Fore.YELLOW}|::| Working in VOLATILE mode!")
        return storage.VolatileStore()
