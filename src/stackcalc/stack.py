from .util import InsufficientStack, general, fixed


class Stack:
    '''
    Operand stack of floats. The top of the stack is the last element.

    Every operation that would pop more than is present raises
    InsufficientStack before touching the contents.
    '''

    def __init__(self, values=()):
        self._items = [float(value) for value in values]

    def push(self, value):
        self._items.append(float(value))

    def pop(self):
        '''
        Remove and return the element on top of the stack.
        '''
        return self.pop_n(1)[0]

    def pop_n(self, n):
        '''
        Pop n elements from the stack, topmost first.
        '''
        if len(self._items) < n:
            raise InsufficientStack(n)
        return [self._items.pop() for _ in range(n)]

    def pop_reversed(self, n):
        '''
        Pop n elements from the stack, in the order they were pushed.

        So that 9 2 ^ is 9**2 rather than 2**9.
        '''
        return list(reversed(self.pop_n(n)))

    def swap(self):
        '''
        Swap two elements at top of stack.
        '''
        self._items.extend(self.pop_n(2))

    def clear(self):
        self._items.clear()

    def sort(self):
        self._items.sort()

    def top(self):
        '''
        Element on top of the stack, left in place.

        An empty stack reads as 0.0 rather than raising; the predicate
        operators (isnan, signbit, ...) rely on this.
        '''
        if not self._items:
            return 0.0
        return self._items[-1]

    def empty(self):
        return not self._items

    def copy(self):
        return list(self._items)

    def restore(self, values):
        '''
        Replace the contents with a snapshot previously taken by copy().
        '''
        self._items[:] = values

    def render(self):
        return self._render(general)

    def render_fixed(self):
        return self._render(fixed)

    def _render(self, fmt):
        return '[ ' + '  '.join(map(fmt, self._items)) + ' ]'

    def __len__(self):
        return len(self._items)

    def __str__(self):
        return self.render()

    def __repr__(self):
        return '{}({!r})'.format(type(self).__name__, self._items)
