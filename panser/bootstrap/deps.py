import json
from functools import lru_cache

from pydantic import ValidationError

from panser.bootstrap.config.settings import PanserSettings
from panser.core.codecs.registry import CodecRegistry, Format
from panser.infra.codecs.bincode_codec import BincodeCodec
from panser.infra.codecs.cbor_codec import CborCodec
from panser.infra.codecs.envy_codec import EnvyCodec
from panser.infra.codecs.hjson_codec import HjsonCodec
from panser.infra.codecs.json_codec import JsonCodec
from panser.infra.codecs.msgpack_codec import MsgPackCodec
from panser.infra.codecs.pickle_codec import PickleCodec
from panser.infra.codecs.toml_codec import TomlCodec
from panser.infra.codecs.url_codec import UrlCodec
from panser.infra.codecs.yaml_codec import YamlCodec


@lru_cache
def get_registry() -> CodecRegistry:
    registry = CodecRegistry()
    registry.register(Format.bincode, BincodeCodec())
    registry.register(Format.cbor, CborCodec())
    registry.register(Format.envy, EnvyCodec())
    registry.register(Format.hjson, HjsonCodec())
    registry.register(Format.json, JsonCodec())
    registry.register(Format.msgpack, MsgPackCodec())
    registry.register(Format.pickle, PickleCodec())
    registry.register(Format.toml, TomlCodec())
    registry.register(Format.url, UrlCodec())
    registry.register(Format.yaml, YamlCodec())
    return registry


@lru_cache
def get_settings() -> PanserSettings:
    try:
        return PanserSettings()
    except ValidationError as ex:
        msg = ["Configuration validation failed:"]
        errs = json.loads(ex.json())
        for err in errs:
            msg.append(f"  {'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}")
        raise SystemExit("\n".join(msg))
