
# _sexpr_parsetab.py
# This file is automatically generated. Do not edit.
# pylint: disable=W,C,R
_tabversion = '3.10'

_lr_method = 'LALR'

_lr_signature = 'sexprLPAREN QUOTED_SYMBOL RPAREN STRING SYMBOLsexpr : SYMBOL\n                 | STRING\n                 | QUOTED_SYMBOLsexpr : LPAREN sexpr_list RPARENsexpr_list : sexpr_list : sexpr_list sexpr'
    
_lr_action_items = {'SYMBOL':([0,2,3,4,5,6,7,8,],[2,-1,-2,-3,-5,2,-4,-6,]),'STRING':([0,2,3,4,5,6,7,8,],[3,-1,-2,-3,-5,3,-4,-6,]),'QUOTED_SYMBOL':([0,2,3,4,5,6,7,8,],[4,-1,-2,-3,-5,4,-4,-6,]),'LPAREN':([0,2,3,4,5,6,7,8,],[5,-1,-2,-3,-5,5,-4,-6,]),'$end':([1,2,3,4,7,],[0,-1,-2,-3,-4,]),'RPAREN':([2,3,4,5,6,7,8,],[-1,-2,-3,-5,7,-4,-6,]),}

_lr_action = {}
for _k, _v in _lr_action_items.items():
   for _x,_y in zip(_v[0],_v[1]):
      if not _x in _lr_action:  _lr_action[_x] = {}
      _lr_action[_x][_k] = _y
del _lr_action_items

_lr_goto_items = {'sexpr':([0,6,],[1,8,]),'sexpr_list':([5,],[6,]),}

_lr_goto = {}
for _k, _v in _lr_goto_items.items():
   for _x, _y in zip(_v[0], _v[1]):
       if not _x in _lr_goto: _lr_goto[_x] = {}
       _lr_goto[_x][_k] = _y
del _lr_goto_items
_lr_productions = [
  ("S' -> sexpr","S'",1,None,None,None),
  ('sexpr -> SYMBOL','sexpr',1,'p_sexpr_atom','sexpr_parser.py',30),
  ('sexpr -> STRING','sexpr',1,'p_sexpr_atom','sexpr_parser.py',31),
  ('sexpr -> QUOTED_SYMBOL','sexpr',1,'p_sexpr_atom','sexpr_parser.py',32),
  ('sexpr -> LPAREN sexpr_list RPAREN','sexpr',3,'p_sexpr_list','sexpr_parser.py',36),
  ('sexpr_list -> <empty>','sexpr_list',0,'p_sexpr_list_empty','sexpr_parser.py',40),
  ('sexpr_list -> sexpr_list sexpr','sexpr_list',2,'p_sexpr_list_multiple','sexpr_parser.py',44),
]
