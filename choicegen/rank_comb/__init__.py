from .main_functions import (check_combination, rank_combination,
                             rank_combination_raw, generate_combination,
                             generate_combination_raw, rank, unrank)
