# coding=utf-8

BINLOG_CHECKSUM_ALG_OFF                 = 0
BINLOG_CHECKSUM_ALG_CRC32               = 1
BINLOG_CHECKSUM_ALG_UNDEF               = 255

BINLOG_CHECKSUM_LEN                     = 4
# checksum algorithm byte + checksum value at the end of a format description event
BINLOG_CHECKSUM_ALG_DESC_LEN            = 1 + BINLOG_CHECKSUM_LEN

# MariaDB 5.3.0 is the first server writing the checksum algorithm
CHECKSUM_VERSION_SPLIT_MARIADB          = (5, 3, 0)
CHECKSUM_VERSION_PRODUCT_MARIADB        = (CHECKSUM_VERSION_SPLIT_MARIADB[0] * 256 +
                                           CHECKSUM_VERSION_SPLIT_MARIADB[1]) * 256 + \
                                          CHECKSUM_VERSION_SPLIT_MARIADB[2]
