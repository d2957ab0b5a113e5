import gzip
import logging
import shutil
from pathlib import Path
from typing import Union

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

_logger = logging.getLogger(__name__)


class RequestError(Exception):
    """Error raised when a network request fails"""

    pass


def requests_retry_session(backoff_factor=0.1, **kw):
    """
    Create a requests Session that will retry http
    requests on failure. All keyword arguments are passed
    directly to `urllib3.util.retry.Retry`

    The only kwargs we provide default values for are
    `backoff_factor` and `total`
    """
    kwargs = dict(backoff_factor=backoff_factor, total=5)
    kwargs.update(kw)
    adapter = HTTPAdapter(max_retries=Retry(**kwargs))
    http = requests.Session()
    http.mount("https://", adapter)
    http.mount("http://", adapter)

    return http


def download_to(url: str, path: Union[str, Path], chunk_size: int = 1 << 20) -> Path:
    """
    Stream the body of `url` into the file at `path`

    Raises
    ------
    RequestError
        When the server does not answer with a success status
    """
    path = Path(path)
    _logger.info("Downloading %s to %s", url, path)
    with requests_retry_session().get(url, stream=True, timeout=60) as res:
        if not res.ok:
            msg = f"Download of {url} failed with status {res.status_code}"
            raise RequestError(msg)
        with open(path, "wb") as f:
            for chunk in res.iter_content(chunk_size=chunk_size):
                f.write(chunk)

    return path


def gunzip(src: Union[str, Path], dest: Union[str, Path]) -> Path:
    "Decompress the gzip file `src` into `dest`"
    dest = Path(dest)
    with gzip.open(src, "rb") as fin, open(dest, "wb") as fout:
        shutil.copyfileobj(fin, fout)

    return dest
