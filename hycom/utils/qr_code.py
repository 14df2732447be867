import base64

PNG_DATA_URI_PREFIX = "data:image/png;base64,"


def decode_data_uri(data_uri: str) -> bytes:
    """
    去掉 data:image/png;base64, 前缀（若存在）后做 base64 解码。

    前缀格式不同时不会被剥离，解码失败会抛出 binascii.Error（ValueError 子类）。
    """
    if data_uri.startswith(PNG_DATA_URI_PREFIX):
        data_uri = data_uri[len(PNG_DATA_URI_PREFIX):]
    return base64.b64decode(data_uri, validate=True)


def encode_data_uri(raw: bytes) -> str:
    return PNG_DATA_URI_PREFIX + base64.b64encode(raw).decode("ascii")
