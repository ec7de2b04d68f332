# This file is part of dmoji.
#
# SPDX-License-Identifier: GPL-3.0-only
