from pagewright_core.utils.files import (
    delete_if_present as delete_if_present,
    StampGenerator as StampGenerator,
    unique_stamp as unique_stamp,
)
