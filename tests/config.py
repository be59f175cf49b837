from libb import Setting

Setting.unlock()

sqlite = Setting()
sqlite.database=':memory:'
sqlite.detect_types=0

mapping = Setting()
mapping.strict_keys=False
mapping.ignore_unknown_columns=True
mapping.cache_maxsize=64

Setting.lock()
