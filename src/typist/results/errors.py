# SPDX-FileCopyrightText: 2023 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later


class DatabaseError(Exception):
    pass


class ReadOnlyStorageError(Exception):
    pass
