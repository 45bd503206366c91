# This is free and unencumbered software released into the public domain.
#
# Anyone is free to copy, modify, publish, use, compile, sell, or
# distribute this software, either in source code form or as a compiled
# binary, for any purpose, commercial or non-commercial, and by any
# means.
#
# In jurisdictions that recognize copyright laws, the author or authors
# of this software dedicate any and all copyright interest in the
# software to the public domain. We make this dedication for the benefit
# of the public at large and to the detriment of our heirs and
# successors. We intend this dedication to be an overt act of
# relinquishment in perpetuity of all present and future rights to this
# software under copyright law.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT.
# IN NO EVENT SHALL THE AUTHORS BE LIABLE FOR ANY CLAIM, DAMAGES OR
# OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE,
# ARISING FROM, OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR
# OTHER DEALINGS IN THE SOFTWARE.
#
# For more information, please refer to <http://unlicense.org/>

import logging
import mmap
import os
from contextlib import contextmanager

from linecompare.errors import AcquisitionError, ReleaseError


logger = logging.getLogger(__name__)


def _read_all(f, path: str) -> bytes:
    try:
        return f.read()
    except OSError as e:
        raise AcquisitionError(path, 'read', e.strerror or str(e)) from e


@contextmanager
def mapped_file(path: str, use_mmap: bool = True):
    """
    Yields the contents of ``path`` as a read-only buffer.

    The file is memory-mapped when possible. Empty files, and files that cannot
    be mapped (pipes, special files), are read into memory instead; an empty
    file yields b"". The buffer stays valid until the context exits.
    """
    try:
        f = open(path, 'rb')
    except OSError as e:
        raise AcquisitionError(path, 'open', e.strerror or str(e)) from e

    with f:
        size = os.fstat(f.fileno()).st_size
        if not use_mmap or size == 0:
            yield _read_all(f, path)
            return

        try:
            mm = mmap.mmap(f.fileno(), 0, access=mmap.ACCESS_READ)
        except (OSError, ValueError) as e:
            logger.warning(f"Cannot map {path} ({e}), reading it into memory instead")
            yield _read_all(f, path)
            return

        try:
            yield mm
        except BaseException:
            # keep the original error; a failed unmap is only logged
            try:
                mm.close()
            except OSError as e:
                logger.error(f'failed to unmap input file "{path}" of length {size} - {e}')
            raise

        try:
            mm.close()
        except OSError as e:
            raise ReleaseError(path, size, e.strerror or str(e)) from e
